from covpass_helper.i18n import available_locales, make_translator


def test_bundled_locales():
    assert {"en", "de"} <= set(available_locales())


def test_nested_keys_are_flattened():
    translate = make_translator("en")

    assert translate("pass.certificateType.vaccination") == "Vaccination"
    assert translate("pass.disclaimer.label") == "Disclaimer"


def test_german_labels():
    assert make_translator("de")("pass.dateOfBirth") == "Geburtsdatum"


def test_unknown_locale_falls_back_to_english():
    assert make_translator("xx")("pass.name") == "Name"


def test_unknown_key_translates_to_itself():
    assert make_translator("de")("pass.nope") == "pass.nope"
