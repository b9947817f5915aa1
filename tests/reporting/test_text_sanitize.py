from src.reporting.text import FONT_BOLD, FONT_REGULAR, text_width, to_latin1_safe, wrap_text


def test_dashes_and_arrow_are_substituted():
    assert to_latin1_safe("Plan – Do — Check → Act") == "Plan - Do - Check -> Act"


def test_whitespace_controls_become_spaces():
    assert to_latin1_safe("line one\nline two\tend\r") == "line one line two end "


def test_non_latin1_characters_are_dropped():
    assert to_latin1_safe("Ready 🚀 now") == "Ready  now"
    assert to_latin1_safe("bell\x07 next\x85") == "bell next"


def test_latin1_accents_survive():
    assert to_latin1_safe("Café Müller ©") == "Café Müller ©"


def test_wrap_fits_short_text_on_one_line():
    assert wrap_text("Strategic Vision & Value", FONT_REGULAR, 9, 500) == ["Strategic Vision & Value"]


def test_wrap_respects_max_width():
    text = "Third-Party & Customer Alignment across every supplier, integrator and downstream customer"
    lines = wrap_text(text, FONT_BOLD, 9, 120)
    assert len(lines) > 1
    assert " ".join(lines) == text
    for line in lines:
        assert len(line.split()) == 1 or text_width(line, FONT_BOLD, 9) <= 120


def test_overlong_word_is_broken_to_fit():
    word = "Supercalifragilisticexpialidocious"
    lines = wrap_text(word, FONT_REGULAR, 12, 20)
    assert len(lines) > 1
    assert "".join(lines) == word
    for line in lines:
        assert text_width(line, FONT_REGULAR, 12) <= 20


def test_overlong_word_between_short_words():
    lines = wrap_text("AI Interoperabilityacrossplatforms now", FONT_REGULAR, 9, 60)
    assert lines[0] == "AI"
    assert lines[-1].endswith("now")
    assert "".join(lines).replace(" ", "") == "AIInteroperabilityacrossplatformsnow"
    for line in lines:
        assert text_width(line, FONT_REGULAR, 9) <= 60


def test_single_character_wider_than_limit_still_advances():
    assert wrap_text("WW", FONT_BOLD, 12, 1) == ["W", "W"]


def test_empty_text_still_yields_one_line():
    assert wrap_text("", FONT_REGULAR, 9, 100) == [""]
