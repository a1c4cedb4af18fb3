import pytest

from casepaper.validation.rules import (
    ImplausibleVitalError,
    VitalOutOfRangeError,
    canonical_blood_pressure,
    canonical_height,
    canonical_pulse,
    canonical_temperature,
    canonical_weight,
    mentions,
    standard_frequency,
)


class TestMentions:
    def test_whole_word_match(self) -> None:
        assert mentions("Adv: CBC if fever persists", "cbc")

    def test_ignores_partial_words(self) -> None:
        assert not mentions("Tablets given", "tab")
        assert not mentions("paincream", "pain")

    def test_multi_word_phrase(self) -> None:
        assert mentions("C/o Body ache since 2 days", "body ache")


class TestCanonicalTemperature:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("101 F", "101 °F"),
            ("99.5", "99.5 °F"),
            ("38.5C", "38.5 °C"),
            ("37", "37 °C"),
        ],
    )
    def test_canonical_forms(self, value: str, expected: str) -> None:
        assert canonical_temperature(value) == expected

    def test_implausible_value_raises(self) -> None:
        with pytest.raises(VitalOutOfRangeError):
            canonical_temperature("200")

    def test_no_number_raises(self) -> None:
        with pytest.raises(ImplausibleVitalError):
            canonical_temperature("afebrile")


class TestCanonicalBloodPressure:
    def test_adds_unit(self) -> None:
        assert canonical_blood_pressure("120/80") == "120/80 mmHg"

    def test_reversed_pair_raises(self) -> None:
        with pytest.raises(VitalOutOfRangeError):
            canonical_blood_pressure("80/120")

    def test_single_number_raises(self) -> None:
        with pytest.raises(VitalOutOfRangeError):
            canonical_blood_pressure("120")


class TestCanonicalPulse:
    def test_formats_bpm(self) -> None:
        assert canonical_pulse("92/min") == "92 bpm"

    def test_out_of_range_raises(self) -> None:
        with pytest.raises(VitalOutOfRangeError):
            canonical_pulse("920")

    def test_bradycardia_reading_is_out_of_range(self) -> None:
        with pytest.raises(VitalOutOfRangeError):
            canonical_pulse("28/min")

    def test_no_number_is_not_out_of_range(self) -> None:
        with pytest.raises(ImplausibleVitalError) as exc_info:
            canonical_pulse("regular")
        assert not isinstance(exc_info.value, VitalOutOfRangeError)


class TestCanonicalWeightAndHeight:
    def test_weight_defaults_to_kg(self) -> None:
        assert canonical_weight("70") == "70 kg"

    def test_weight_keeps_pounds(self) -> None:
        assert canonical_weight("154 lbs") == "154 lb"

    def test_height_in_metres_becomes_cm(self) -> None:
        assert canonical_height("1.7 m") == "170 cm"

    def test_height_in_metres_without_space(self) -> None:
        assert canonical_height("1.65m") == "165 cm"

    def test_height_in_centimetres_is_not_read_as_metres(self) -> None:
        assert canonical_height("165cm") == "165 cm"

    def test_height_in_feet_kept_as_written(self) -> None:
        assert canonical_height("5'8\"") == "5'8\""

    def test_height_out_of_range_raises(self) -> None:
        with pytest.raises(VitalOutOfRangeError):
            canonical_height("999")


class TestStandardFrequency:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("once daily", "OD"),
            ("Daily", "OD"),
            ("1 time a day", "OD"),
            ("twice daily", "BD"),
            ("Twice a day", "BD"),
            ("2 times per day", "BD"),
            ("thrice a day", "TID"),
            ("3 times/day", "TID"),
            ("four times daily", "QID"),
        ],
    )
    def test_daily_rates_map_to_codes(self, value: str, expected: str) -> None:
        assert standard_frequency(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "once weekly",
            "twice a week",
            "once in 15 days",
            "once a month",
            "alternate days",
            "every 8 hours",
            "SOS",
            "once daily at night",
            "TID",
        ],
    )
    def test_other_schedules_are_kept(self, value: str) -> None:
        assert standard_frequency(value) == value
