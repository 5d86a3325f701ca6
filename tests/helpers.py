"""Builders for ACF JSON used across tests."""


def make_field(name, field_type="text", key=None, label=None, **kwargs) -> dict:
    """ACF JSON dict for one field."""
    data = {
        "key": key or f"field_{name}",
        "label": label or name.replace("_", " ").title(),
        "name": name,
        "type": field_type,
    }
    data.update(kwargs)
    return data


def make_group(key, title, fields) -> dict:
    """ACF JSON dict for one field group."""
    return {
        "key": key,
        "title": title,
        "fields": fields,
        "location": [[{"param": "post_type", "operator": "==", "value": "page"}]],
        "menu_order": 0,
        "active": True,
    }
