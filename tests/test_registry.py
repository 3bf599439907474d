import pytest

from charsniff.registry import (
    POLISH_CANDIDATES,
    EncodingRegistry,
    UnregisteredLocaleError,
    compile_diacritics,
)


def test_polish_locale_is_seeded():
    registry = EncodingRegistry()
    assert registry.is_registered("pl-PL")
    assert registry.candidates_for("pl-PL") == ("UTF-8", "ISO-8859-2", "WINDOWS-1250")
    assert registry.matcher_for("pl-PL").search("ż") is not None
    assert registry.matcher_for("pl-PL").search("z") is None


def test_unseeded_registry_is_empty():
    registry = EncodingRegistry(seed=False)
    assert not registry.is_registered("pl-PL")
    assert registry.locales() == []


def test_locale_keys_match_exactly():
    registry = EncodingRegistry()
    assert not registry.is_registered("pl-pl")
    assert not registry.is_registered("pl_PL")


def test_partial_registration_is_not_registered():
    registry = EncodingRegistry()
    registry.register_candidates("el-GR", ["UTF-8", "ISO-8859-7"])
    assert not registry.is_registered("el-GR")
    with pytest.raises(UnregisteredLocaleError):
        registry.matcher_for("el-GR")
    with pytest.raises(UnregisteredLocaleError):
        registry.candidates_for("el-GR")
    assert registry.locales() == ["pl-PL"]

    registry.register_diacritics("el-GR", "άέή")
    assert registry.is_registered("el-GR")
    assert registry.locales() == ["pl-PL", "el-GR"]


def test_later_registration_overwrites_and_keeps_order():
    registry = EncodingRegistry()
    registry.register_candidates("pl-PL", ["WINDOWS-1250", "UTF-8"])
    assert registry.candidates_for("pl-PL") == ("WINDOWS-1250", "UTF-8")
    registry.register_candidates("pl-PL", iter(POLISH_CANDIDATES))
    assert registry.candidates_for("pl-PL") == POLISH_CANDIDATES


def test_stored_candidates_are_detached_from_caller_list():
    registry = EncodingRegistry()
    encodings = ["UTF-8", "ISO-8859-7"]
    registry.register_candidates("el-GR", encodings)
    encodings.append("CP1253")
    assert registry.candidates_for("el-GR") == ("UTF-8", "ISO-8859-7")


def test_empty_registrations_are_rejected():
    registry = EncodingRegistry()
    with pytest.raises(ValueError):
        registry.register_candidates("el-GR", [])
    with pytest.raises(ValueError):
        registry.register_diacritics("el-GR", "")


def test_unregistered_lookup_names_the_locale():
    registry = EncodingRegistry()
    with pytest.raises(UnregisteredLocaleError, match="de-DE") as excinfo:
        registry.candidates_for("de-DE")
    assert excinfo.value.locale == "de-DE"
    assert isinstance(excinfo.value, LookupError)


def test_diacritics_are_literal_characters():
    matcher = compile_diacritics("^]-\\.")
    assert matcher.findall("a-b^c]d\\e.f") == ["-", "^", "]", "\\", "."]
    assert matcher.search("abc") is None


def test_diacritics_accept_a_sequence_of_characters():
    matcher = compile_diacritics(["ą", "ę", "ą"])
    assert matcher.findall("ąbę") == ["ą", "ę"]
