from gaan_khoj.core.text import (
    COLLECTED,
    VARIOUS_ARTISTS,
    canonical_label,
    clean_display,
    collation_key,
    normalize_text,
    split_credits,
    to_bengali_numerals,
)


def test_clean_display_drops_invisible_characters_and_blank_values():
    assert clean_display("  আমার\u200b  গান\u00ad ") == "আমার গান"
    assert clean_display("   ") is None
    assert clean_display(None) is None
    assert clean_display(42) is None


def test_normalize_text_case_folds_and_handles_missing_values():
    assert normalize_text("  Alpha   BETA ") == "alpha beta"
    assert normalize_text(None) == ""
    assert normalize_text("") == ""


def test_canonical_label_maps_aliases_and_drops_junk():
    assert canonical_label("Various Artists") == VARIOUS_ARTISTS
    assert canonical_label("collected") == COLLECTED
    assert canonical_label("undefined") is None
    assert canonical_label("Placeholder") is None
    assert canonical_label(" লালন ফকির ") == "লালন ফকির"


def test_split_credits_handles_bengali_conjunctions_and_separators():
    assert split_credits("হেমন্ত মুখোপাধ্যায় ও সন্ধ্যা মুখোপাধ্যায়") == [
        "হেমন্ত মুখোপাধ্যায়",
        "সন্ধ্যা মুখোপাধ্যায়",
    ]
    assert split_credits("A, B; A / C") == ["A", "B", "C"]
    assert split_credits(None) == []


def test_collation_puts_bengali_before_latin():
    labels = ["Arijit Singh", "লালন ফকির", "কাজী নজরুল ইসলাম", "অজয়"]
    assert sorted(labels, key=collation_key) == [
        "অজয়",
        "কাজী নজরুল ইসলাম",
        "লালন ফকির",
        "Arijit Singh",
    ]


def test_bengali_numerals():
    assert to_bengali_numerals(2024) == "২০২৪"
    assert to_bengali_numerals(None) == ""
