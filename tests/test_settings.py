import pytest

from chnative.settings import (
    SETTINGS,
    QuerySettings,
    SettingType,
    encode_string,
    encode_uvarint,
    make_query_settings,
)


def _decode_uvarint(data, pos):
    shift = 0
    value = 0
    while True:
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        if byte < 0x80:
            return value, pos
        shift += 7


def _decode_settings(data):
    pos = 0
    out = {}
    while pos < len(data):
        length, pos = _decode_uvarint(data, pos)
        name = data[pos:pos + length].decode("utf-8")
        pos += length
        value, pos = _decode_uvarint(data, pos)
        out[name] = value
    return out


def test_setting_names_are_unique():
    query = {info.name: "1" for info in SETTINGS}
    settings = make_query_settings(query)
    assert len(settings.settings) == len(SETTINGS)
    assert settings.text.count("&") == len(SETTINGS) - 1


def test_all_settings_parse():
    parts = []
    for info in SETTINGS:
        value = "false" if info.type is SettingType.BOOL else "1000"
        parts.append(f"{info.name}={value}")
    query = "debug=true&" + "&".join(parts)
    settings = make_query_settings(query)
    assert len(settings.settings) == len(SETTINGS)
    decoded = _decode_settings(settings.serialize())
    for info in SETTINGS:
        expected = 0 if info.type is SettingType.BOOL else 1000
        assert decoded[info.name] == expected


def test_commented_out_setting_is_not_known():
    assert "asterisk_left_columns_only" not in {info.name for info in SETTINGS}
    settings = make_query_settings({"asterisk_left_columns_only": "1"})
    assert settings.is_empty()


def test_empty_and_unknown_values_skipped():
    settings = QuerySettings.from_query("max_threads=&debug=true&compress=1")
    assert settings.is_empty()
    assert settings.serialize() == b""
    assert str(settings) == ""


def test_text_follows_known_order():
    settings = make_query_settings("max_threads=4&max_block_size=10")
    assert settings.text == "max_block_size=10&max_threads=4"
    assert str(settings) == settings.text
    assert settings.settings == {"max_block_size": 10, "max_threads": 4}


def test_mapping_input_uses_first_value():
    settings = make_query_settings({"max_threads": ["8", "9"], "extremes": "true"})
    assert settings.settings == {"max_threads": 8, "extremes": 1}


@pytest.mark.parametrize("word", ["1", "t", "T", "TRUE", "true", "True"])
def test_bool_true_words(word):
    assert make_query_settings({"extremes": word}).settings["extremes"] == 1


@pytest.mark.parametrize("word", ["0", "f", "F", "FALSE", "false", "False"])
def test_bool_false_words(word):
    assert make_query_settings({"extremes": word}).settings["extremes"] == 0


@pytest.mark.parametrize("word", ["yes", "on", "2", "tRUE"])
def test_bool_invalid(word):
    with pytest.raises(ValueError):
        make_query_settings({"extremes": word})


@pytest.mark.parametrize(
    "name, value",
    [
        ("max_threads", "-1"),
        ("max_threads", "abc"),
        ("max_threads", "18446744073709551616"),
        ("network_zstd_compression_level", "-1"),
        ("connect_timeout", "1.5"),
    ],
)
def test_numeric_invalid(name, value):
    with pytest.raises(ValueError):
        make_query_settings({name: value})


def test_max_uint64_accepted():
    settings = make_query_settings({"max_memory_usage": "18446744073709551615"})
    assert settings.settings["max_memory_usage"] == (1 << 64) - 1
    assert settings.serialize().endswith(b"\xff" * 9 + b"\x01")


def test_encode_uvarint_values():
    assert encode_uvarint(0) == b"\x00"
    assert encode_uvarint(127) == b"\x7f"
    assert encode_uvarint(300) == b"\xac\x02"


def test_encode_uvarint_out_of_range():
    with pytest.raises(ValueError):
        encode_uvarint(-1)
    with pytest.raises(ValueError):
        encode_uvarint(1 << 64)


def test_encode_string():
    assert encode_string("abc") == b"\x03abc"
    assert encode_string("") == b"\x00"


def test_serialize_single_setting():
    settings = make_query_settings("readonly=1")
    assert settings.serialize() == b"\x08readonly\x01"