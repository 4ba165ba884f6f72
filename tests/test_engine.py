"""Tests for the mask engine — token registry, transforms, edit primitives."""

import re
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from input_mask import (
    MaskEngine, TokenRegistry, DEFAULT_REGISTRY, MaskConfigError,
    blank_skeleton, mask, unmask,
    next_editable_index, last_filled_index_at_or_before,
    insert_at, delete_range, caret_on_focus_or_click,
)


# ── Token Registry ───────────────────────────────────────────────────

def test_builtin_symbols():
    reg = TokenRegistry()
    assert reg.accepts("N", "7") and not reg.accepts("N", "a")
    assert reg.accepts("S", "a") and reg.accepts("S", "Z") and not reg.accepts("S", "1")
    assert reg.accepts("A", "1") and reg.accepts("A", "q") and not reg.accepts("A", "-")
    assert reg.accepts("X", "-") and reg.accepts("X", "\n")


def test_unknown_symbol_is_literal():
    reg = TokenRegistry()
    assert not reg.is_token("(")
    assert not reg.accepts("(", "(")


def test_extend_does_not_touch_original():
    reg = TokenRegistry()
    hexed = reg.extend({"H": "[0-9a-fA-F]", "N": re.compile(r"[0-7]")})
    assert hexed.accepts("H", "f")
    assert not hexed.accepts("N", "9")
    assert "H" not in reg
    assert reg.accepts("N", "9")
    assert DEFAULT_REGISTRY == TokenRegistry()


def test_registry_rejects_bad_symbols():
    with pytest.raises(MaskConfigError):
        TokenRegistry({"HH": "[0-9]"})
    with pytest.raises(MaskConfigError):
        TokenRegistry({"H": "[0-9"})


def test_plain_mapping_accepted_as_registry():
    assert mask("ab12", "HHHH", {"H": "[0-9a-f]"}) == "ab12"


# ── mask ─────────────────────────────────────────────────────────────

def test_mask_basic():
    assert mask("1234", "(N) NNN") == "(1) 234"
    assert mask("1234", "(N) NNA") == "(1) 234"
    assert mask("1234", "(A) AAA") == "(1) 234"
    assert mask("1234", "(X) XXX") == "(1) 234"


def test_mask_any_char_takes_literal_lookalikes():
    assert mask("-*()", "(X) XXX") == "(-) *()"


def test_mask_no_matching_chars():
    assert mask("1234", "(S) SSS") == "( )    "


def test_mask_empty_inputs():
    assert mask("", "(N) NNN") == "( )    "
    assert mask(None, "(N) NNN") == "( )    "
    assert mask("1234", "") == ""


def test_mask_number_input():
    assert mask(5551234, "NNN-NNNN") == "555-1234"


def test_mask_drops_rejected_char_without_retry():
    # "a" is offered to the first N slot only, and dropped
    assert mask("a12", "NS-N") == "1 - "
    assert mask("1a2", "NS-N") == "1a-2"


def test_mask_stops_when_full():
    assert mask("123456789", "NN-NN") == "12-34"


def test_mask_ignores_pasted_literals():
    assert mask("(555) 123-4567", "(NNN) NNN-NNNN") == "(555) 123-4567"


def test_blank_skeleton():
    assert blank_skeleton("(NNN) NNN-NNNN") == "(   )    -    "
    assert blank_skeleton("") == ""


# ── unmask ───────────────────────────────────────────────────────────

def test_unmask_basic():
    assert unmask("(1) 234", "(N) NNN") == "1234"
    assert unmask("(1) 234", "(N) NNA") == "1234"
    assert unmask("(1) 234", "(A) AAA") == "1234"
    assert unmask("(1) 234", "(X) XXX") == "1234"
    assert unmask("(-) *()", "(X) XXX") == "-*()"


def test_unmask_letters_only_pattern():
    assert unmask("(1) 234", "(S) SSS") == ""


def test_unmask_drops_blanks_even_for_any_token():
    assert unmask("(1) 2  ", "(X) XXX") == "12"


def test_unmask_empty_pattern():
    assert unmask("anything", "") == ""


def test_unmask_parse_int():
    assert unmask("(1) 234", "(N) NNN", parse_int=True) == 1234
    assert unmask("( )    ", "(N) NNN", parse_int=True) is None
    assert unmask("(a) b12", "(X) XXX", parse_int=True) is None
    assert unmask("(1) 2ab", "(X) XXX", parse_int=True) == 12


# ── Cursor primitives ────────────────────────────────────────────────

def test_next_editable_index():
    assert next_editable_index("(1)    ", "(N) NNN") == 4
    assert next_editable_index("( )    ", "(N) NNN") == 1
    assert next_editable_index("(1) 234", "(N) NNN") == 7
    assert next_editable_index("", "") == 0


def test_last_filled_index_at_or_before():
    assert last_filled_index_at_or_before("(1) 23 ", "(N) NNN", None, 6) == 5
    assert last_filled_index_at_or_before("(1) 23 ", "(N) NNN", None, 3) == 1
    assert last_filled_index_at_or_before("(1) 23 ", "(N) NNN", None, 0) == -1
    assert last_filled_index_at_or_before("(1) 23 ", "(N) NNN", None, 99) == 5


def test_insert_at_end():
    result = insert_at("(1)    ", "(N) NNN", None, 4, "2")
    assert result.text == "(1) 2  "
    assert result.caret == 5


def test_insert_in_middle_shifts_right():
    result = insert_at("(1) 34 ", "(N) NNN", None, 4, "2")
    assert result.text == "(1) 234"
    assert result.caret == 5


def test_insert_caret_skips_literals():
    result = insert_at("( )    ", "(N) NNN", None, 1, "1")
    assert result.text == "(1)    "
    assert result.caret == 4


def test_insert_rejected_char_keeps_text():
    result = insert_at("(1)    ", "(N) NNN", None, 4, "x")
    assert result.text == "(1)    "
    assert result.caret == 4


def test_insert_paste_multiple_chars():
    result = insert_at("(   )    -    ", "(NNN) NNN-NNNN", None, 1, "555-12")
    assert result.text == "(555) 12 -    "
    assert result.caret == 8


def test_insert_clamps_caret():
    result = insert_at("( )    ", "(N) NNN", None, 99, "1")
    assert result.text == "(1)    "
    assert result.caret == 4
    assert insert_at("", "", None, 3, "abc").text == ""


def test_delete_range_keeps_caret_on_freed_slot():
    result = delete_range("(1) 234", "(N) NNN", None, 4, 5)
    assert result.text == "(1) 34 "
    assert result.caret == 4


def test_delete_range_backspace_at_end():
    result = delete_range("(1) 234", "(N) NNN", None, 6, 7)
    assert result.text == "(1) 23 "
    assert result.caret == 6


def test_delete_range_over_literal_moves_caret_back():
    result = delete_range("(1) 2  ", "(N) NNN", None, 3, 4)
    assert result.text == "(1) 2  "
    assert result.caret == 2


def test_delete_range_selection_and_reversed_bounds():
    assert delete_range("(1) 234", "(N) NNN", None, 2, 6).text == "(1) 4  "
    assert delete_range("(1) 234", "(N) NNN", None, 6, 2).text == "(1) 4  "


def test_delete_range_at_start():
    result = delete_range("(1) 234", "(N) NNN", None, 0, 2)
    assert result.text == "(2) 34 "
    assert result.caret == 0


def test_delete_then_retype_restores_value():
    deleted = delete_range("(1) 234", "(N) NNN", None, 4, 5)
    assert deleted.caret == 4
    retyped = insert_at(deleted.text, "(N) NNN", None, deleted.caret, "2")
    assert retyped.text == "(1) 234"
    assert retyped.caret == 5


def test_delete_range_freed_slot_after_literal():
    # A range that frees a slot keeps the caret at its start, literals included
    result = delete_range("(1) 234", "(N) NNN", None, 2, 5)
    assert result.text == "(1) 34 "
    assert result.caret == 2
    result = delete_range("(555) 123-4567", "(NNN) NNN-NNNN", None, 6, 7)
    assert result.text == "(555) 234-567 "
    assert result.caret == 6


def test_delete_range_empty_range_keeps_caret():
    result = delete_range("(1) 234", "(N) NNN", None, 5, 5)
    assert result.text == "(1) 234"
    assert result.caret == 5


def test_caret_snaps_to_first_gap():
    for requested in (0, 2, 5, 7, 100):
        assert caret_on_focus_or_click("(1)    ", "(N) NNN", None, requested) == 4


def test_caret_kept_when_full():
    assert caret_on_focus_or_click("(1) 234", "(N) NNN", None, 2) == 2
    assert caret_on_focus_or_click("(1) 234", "(N) NNN", None, 100) == 7
    assert caret_on_focus_or_click("(1) 234", "(N) NNN", None, -3) == 0


def test_pattern_symbol_missing_from_registry_is_literal():
    reg = TokenRegistry({"H": "[0-9a-f]"})
    assert mask("1f", "H-Q-H", reg) == "1-Q-f"
    assert mask("1f", "H-Q-H") == "H-Q-H"


# ── MaskEngine ───────────────────────────────────────────────────────

def test_engine_binds_pattern_and_registry():
    phone = MaskEngine("(NNN) NNN-NNNN")
    assert phone.skeleton == "(   )    -    "
    assert phone.slot_count == 10
    assert phone.mask("5551234567") == "(555) 123-4567"
    assert phone.unmask("(555) 123-4567") == "5551234567"
    assert phone.unmask("(555) 123-4567", parse_int=True) == 5551234567
    assert phone.is_complete("(555) 123-4567")
    assert not phone.is_complete("(555) 123-45  ")


def test_engine_edit_methods():
    phone = MaskEngine("(NNN) NNN-NNNN")
    edit = phone.insert_at("(555)    -    ", 6, "1")
    assert (edit.text, edit.caret) == ("(555) 1  -    ", 7)
    edit = phone.delete_range(edit.text, 6, 7)
    assert (edit.text, edit.caret) == ("(555)    -    ", 6)
    assert phone.next_editable_index(edit.text) == 6
    assert phone.last_filled_index_at_or_before(edit.text, 10) == 3
    assert phone.caret_on_focus_or_click(edit.text, 0) == 6


def test_engine_custom_registry_and_equality():
    a = MaskEngine("HH:HH", {"H": "[0-9a-f]"})
    b = MaskEngine("HH:HH", TokenRegistry({"H": "[0-9a-f]"}))
    assert a == b
    assert hash(a) == hash(b)
    assert a.mask("dead") == "de:ad"


def test_engine_empty_pattern():
    blank = MaskEngine("")
    assert blank.mask("123") == ""
    assert blank.unmask("123") == ""
    assert blank.next_editable_index("") == 0
