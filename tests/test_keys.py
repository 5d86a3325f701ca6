"""Tests for KeyAllocator."""

import re
import threading

from acf_generator.codegen.core.keys import KeyAllocator

MINTED = re.compile(r"^(group|field|layout)_[0-9a-f]{13}_\d+$")


class TestAllocate:
    """Tests for KeyAllocator.allocate()."""

    def test_unused_candidate_is_returned_unchanged(self, allocator: KeyAllocator) -> None:
        assert allocator.allocate("field_abc") == "field_abc"

    def test_collision_is_reminted(self, allocator: KeyAllocator) -> None:
        first = allocator.allocate("field_abc")
        second = allocator.allocate("field_abc")
        assert first == "field_abc"
        assert second != "field_abc"
        assert MINTED.match(second)
        assert second.startswith("field_")

    def test_kind_prefixes_minted_key(self, allocator: KeyAllocator) -> None:
        allocator.allocate("shared")
        assert allocator.allocate("shared", "group").startswith("group_")
        assert allocator.allocate("shared", "layout").startswith("layout_")

    def test_empty_candidate_is_minted(self, allocator: KeyAllocator) -> None:
        key = allocator.allocate("", "field")
        assert MINTED.match(key)

    def test_minted_keys_are_never_reused(self, allocator: KeyAllocator) -> None:
        keys = [allocator.allocate("field_dup") for _ in range(500)]
        assert len(set(keys)) == 500

    def test_minted_key_cannot_be_claimed_again(self, allocator: KeyAllocator) -> None:
        allocator.allocate("field_x")
        minted = allocator.allocate("field_x")
        assert allocator.allocate(minted) != minted


class TestBookkeeping:
    """Tests for used-key tracking."""

    def test_used_keys_in_allocation_order(self, allocator: KeyAllocator) -> None:
        allocator.allocate("group_a", "group")
        allocator.allocate("field_b")
        allocator.allocate("layout_c", "layout")
        assert allocator.used_keys == ["group_a", "field_b", "layout_c"]

    def test_is_used(self, allocator: KeyAllocator) -> None:
        allocator.allocate("field_a")
        assert allocator.is_used("field_a")
        assert not allocator.is_used("field_b")

    def test_reset_forgets_keys(self, allocator: KeyAllocator) -> None:
        allocator.allocate("field_a")
        allocator.reset()
        assert allocator.used_keys == []
        assert allocator.allocate("field_a") == "field_a"

    def test_separate_allocators_do_not_share_state(self) -> None:
        assert KeyAllocator().allocate("field_a") == "field_a"
        assert KeyAllocator().allocate("field_a") == "field_a"

    def test_concurrent_allocation_stays_unique(self, allocator: KeyAllocator) -> None:
        results = []

        def worker():
            for _ in range(100):
                results.append(allocator.allocate("field_hot"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 400
        assert len(set(results)) == 400
