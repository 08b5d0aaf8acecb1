import pytest

from clinic_desk.helpers.pack_info import (
    PackInfo,
    compose_medicine_name,
    format_pack_quantity,
    format_unit_quantity,
    parse_pack_info,
    resolve_pack_info,
    to_dispensing_units,
    to_storage_units,
)
from clinic_desk.schemas.sche_medicine import MedicineRecord


def test_parse_packaged_name():
    info = parse_pack_info("Tab Panadol (1 pack = 200 tablets)")
    assert info == PackInfo(base_name="Tab Panadol", has_pack_info=True, pack_size=200, pack_unit="tablets")


def test_parse_plain_name():
    info = parse_pack_info("Cough Syrup 100ml")
    assert info.base_name == "Cough Syrup 100ml"
    assert info.has_pack_info is False
    assert info.pack_size is None
    assert info.pack_unit is None


def test_unrelated_parentheses_are_kept_in_base_name():
    info = parse_pack_info("Panadol (500mg)")
    assert info.has_pack_info is False
    assert info.base_name == "Panadol (500mg)"


def test_plain_name_is_not_trimmed():
    assert parse_pack_info("  Zinc Syrup ").base_name == "  Zinc Syrup "


def test_jar_and_keyword_case():
    info = parse_pack_info("ORS Sachet (1 JAR = 50 Sachets)")
    assert info.has_pack_info is True
    assert info.base_name == "ORS Sachet"
    assert info.pack_size == 50
    # the unit keeps the case written in the name
    assert info.pack_unit == "Sachets"


def test_whitespace_before_parenthesis_is_optional():
    assert parse_pack_info("Amoxil(1 pack = 20 capsules)").base_name == "Amoxil"
    assert parse_pack_info("Amoxil    (1 pack = 20 capsules)").base_name == "Amoxil"


def test_base_name_may_contain_parentheses():
    info = parse_pack_info("Panadol (500mg) (1 pack = 100 tablets)")
    assert info.base_name == "Panadol (500mg)"
    assert info.pack_size == 100


@pytest.mark.parametrize("name", [
    "Tab Panadol (1 pack = 200 tablets) extra",
    "Tab Panadol (1 pack = 200 tablets)\n",
    "Tab Panadol (1 pack = 2.5 tablets)",
    "Tab Panadol (1 pack = 1,000 tablets)",
    "Tab Panadol (2 packs = 200 tablets)",
    "Tab Panadol (1 box = 200 tablets)",
    "(1 pack = 200 tablets)",
])
def test_names_outside_the_grammar_have_no_pack_info(name):
    info = parse_pack_info(name)
    assert info.has_pack_info is False
    assert info.base_name == name


def test_zero_pack_size_still_parses():
    info = parse_pack_info("Broken Item (1 pack = 0 tablets)")
    assert info.has_pack_info is True
    assert info.pack_size == 0


@pytest.mark.parametrize("name", [
    "Tab Panadol (1 pack = 200 tablets)",
    "  Brufen 400 (1 pack = 30 tabs)",
    "ORS (1 jar = 50 sachets)",
])
def test_reconstructed_name_parses_to_same_info(name):
    info = parse_pack_info(name)
    rebuilt = compose_medicine_name(info.base_name, info.pack_size, info.pack_unit)
    assert parse_pack_info(rebuilt) == info


def test_with_defaults_only_fills_missing_fields():
    plain = parse_pack_info("Cough Syrup 100ml").with_defaults()
    assert (plain.has_pack_info, plain.pack_size, plain.pack_unit) == (False, 1, "unit")

    packed = parse_pack_info("Tab Panadol (1 pack = 200 tablets)").with_defaults()
    assert (packed.pack_size, packed.pack_unit) == (200, "tablets")


def test_conversions():
    info = parse_pack_info("Tab Panadol (1 pack = 200 tablets)")
    assert to_dispensing_units(info, 2) == 400
    assert to_dispensing_units(info, 0.1) == pytest.approx(20)
    assert to_storage_units(info, 20) == pytest.approx(0.1)
    assert to_storage_units(info, 30) == pytest.approx(0.15)


@pytest.mark.parametrize("units", [0, 1, 7, 20, 199, 1234.5])
def test_units_survive_a_round_trip(units):
    info = parse_pack_info("Tab Panadol (1 pack = 30 tablets)")
    assert to_dispensing_units(info, to_storage_units(info, units)) == pytest.approx(units)


def test_zero_pack_size_refuses_division():
    info = parse_pack_info("Broken Item (1 pack = 0 tablets)")
    with pytest.raises(ZeroDivisionError):
        to_storage_units(info, 10)


def test_plain_item_needs_explicit_defaults_to_convert():
    info = parse_pack_info("Cough Syrup 100ml")
    with pytest.raises(ValueError):
        to_storage_units(info, 3)
    assert to_storage_units(info.with_defaults(), 3) == 3


@pytest.mark.parametrize("quantity, expected", [
    (20, "20"),
    (20.0, "20"),
    (2.5, "2.5"),
    (0.05 * 200, "10"),
    (33.333, "33.3"),
])
def test_format_unit_quantity(quantity, expected):
    assert format_unit_quantity(quantity) == expected


@pytest.mark.parametrize("quantity, expected", [
    (2, "2"),
    (0.1, "0.10"),
    (0.05, "0.05"),
    (1 - 0.9, "0.10"),
    (0.126, "0.13"),
])
def test_format_pack_quantity(quantity, expected):
    assert format_pack_quantity(quantity) == expected


def test_structured_fields_take_precedence_over_the_name():
    medicine = MedicineRecord(id=1, name="Amoxil 250", quantity=3, unit="packs", pack_size=12, pack_unit="capsules")
    info = resolve_pack_info(medicine)
    assert info == PackInfo(base_name="Amoxil 250", has_pack_info=True, pack_size=12, pack_unit="capsules")


def test_legacy_record_falls_back_to_the_name():
    medicine = MedicineRecord.model_validate({'id': 1, 'name': 'Tab Panadol (1 pack = 200 tablets)', 'quantity': 1})
    info = resolve_pack_info(medicine)
    assert info.base_name == "Tab Panadol"
    assert info.pack_size == 200
