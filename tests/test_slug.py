import pytest

from gaan_khoj.core.models import Song
from gaan_khoj.core.slug import browse_route, make_slug, search_route, slug_part, song_route


def test_make_slug_is_deterministic():
    first = make_slug("আমার সোনার বাংলা", "রবীন্দ্রনাথ ঠাকুর", "রবীন্দ্রনাথ ঠাকুর")
    second = make_slug("আমার সোনার বাংলা", "রবীন্দ্রনাথ ঠাকুর", "রবীন্দ্রনাথ ঠাকুর")
    assert first == second


def test_make_slug_preserves_bengali_letters_and_marks():
    slug = make_slug("আমার সোনার বাংলা", "রবীন্দ্রনাথ ঠাকুর")
    assert slug == "আমার-সোনার-বাংলা-by-রবীন্দ্রনাথ-ঠাকুর"


def test_make_slug_strips_punctuation_and_collapses_separators():
    assert make_slug("  Hello,  World!! ", "The -- Band") == "hello-world-by-the-band"


def test_make_slug_appends_supplied_lyricist():
    assert make_slug("Song", "Singer", "Writer Name") == "song-by-singer-lyricist-writer-name"


@pytest.mark.parametrize("lyricist", [None, "", "   ", "সংগৃহীত", "অজানা গীতিকার"])
def test_make_slug_omits_generic_or_missing_lyricist(lyricist):
    assert make_slug("Song", "Singer", lyricist) == "song-by-singer"


@pytest.mark.parametrize(
    "title, artist, expected",
    [
        ("", "", "untitled-by-unknown-artist"),
        ("!!!", "???", "untitled-by-unknown-artist"),
        (None, None, "untitled-by-unknown-artist"),
    ],
)
def test_make_slug_never_returns_empty(title, artist, expected):
    assert make_slug(title, artist) == expected


def test_lyricist_segment_falls_back_when_sanitised_away():
    assert make_slug("Song", "Singer", "***") == "song-by-singer-lyricist-unknown-lyricist"


def test_slug_part_keeps_digits():
    assert slug_part("Track ২০২৪ 7", "untitled") == "track-২০২৪-7"


def test_identical_credits_collide():
    # Slugs carry no identifier, so identical credits share one link.
    first = Song(title="Same", artist="Artist")
    second = Song(title="same", artist="ARTIST", lyrics="different")
    assert first.slug == second.slug


def test_routes_percent_encode_their_payload():
    assert song_route("a b") == "/song/a%20b"
    assert search_route("  Alpha Beta ") == "/search?q=Alpha%20Beta"
    assert search_route("ক/খ") == "/search?q=%E0%A6%95%2F%E0%A6%96"
    assert browse_route("composer", " A & B ") == "/browse/composer?v=A%20%26%20B"
