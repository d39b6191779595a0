from stormdefs._internal.pretty_json import pretty_dumps


def test_pretty_dumps_keeps_key_order_and_unicode():
    payload = {"b": 2, "a": {"z": "Café", "y": None}, "list": [3, 2, 1]}
    text = pretty_dumps(payload)
    assert text == (
        '{\n'
        '  "b": 2,\n'
        '  "a": {\n'
        '    "z": "Café",\n'
        '    "y": null\n'
        '  },\n'
        '  "list": [\n'
        '    3,\n'
        '    2,\n'
        '    1\n'
        '  ]\n'
        '}\n'
    )


def test_pretty_dumps_is_stable():
    payload = {"definitions": [{"name": "A", "tags": ["x", ""]}]}
    assert pretty_dumps(payload) == pretty_dumps(payload)
