"""Tests for CodeBuilder."""

from acf_generator.codegen.core.builder import CodeBuilder


class TestCodeBuilder:
    """Tests for the append-only builder."""

    def test_lines_are_indented_by_depth(self) -> None:
        out = CodeBuilder("    ", depth=2)
        out.line("echo 1;")
        out.line("echo 2;", 1)
        assert out.build() == "        echo 1;\n            echo 2;\n"

    def test_empty_line_has_no_indent(self) -> None:
        out = CodeBuilder("    ", depth=3)
        out.line()
        out.blank()
        assert out.build() == "\n\n"

    def test_block_maps_leading_spaces_to_levels(self) -> None:
        out = CodeBuilder("\t", depth=1)
        out.block(
            """
            if ( $a ) {
                echo $a;
            }
            """
        )
        assert out.build() == "\tif ( $a ) {\n\t\techo $a;\n\t}\n"

    def test_indented_context_restores_depth(self) -> None:
        out = CodeBuilder("  ")
        with out.indented():
            out.line("inner")
        out.line("outer")
        assert out.build() == "  inner\nouter\n"
        assert out.depth == 0

    def test_raw_is_verbatim_and_skips_empty(self) -> None:
        out = CodeBuilder()
        out.raw("")
        assert not out
        out.raw("  as is\n")
        assert len(out) == 1
        assert out.build() == "  as is\n"

    def test_lines(self) -> None:
        out = CodeBuilder("    ", depth=1).lines("a", "b")
        assert out.build() == "    a\n    b\n"
