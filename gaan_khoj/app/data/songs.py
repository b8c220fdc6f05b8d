"""Static song records served by the in-memory catalog.

Record order is significant: it is the catalog's iteration order and drives
which songs the curated home-page lists pick first.
"""

from __future__ import annotations

from typing import Tuple

from gaan_khoj.core.models import LYRICS_UNAVAILABLE, PLACEHOLDER_GENRE, Song

TAGORE = "রবীন্দ্রনাথ ঠাকুর"
NAZRUL = "কাজী নজরুল ইসলাম"

RABINDRA_SANGEET = "রবীন্দ্রসঙ্গীত"
NAZRUL_GEETI = "নজরুলগীতি"
MODERN = "আধুনিক"
PATRIOTIC = "দেশাত্মবোধক"
FILM = "চলচ্চিত্রের গান"

SONGS: Tuple[Song, ...] = (
    Song(
        title="কফি হাউসের সেই আড্ডাটা",
        artist="মান্না দে",
        lyricist="গৌরীপ্রসন্ন মজুমদার",
        composer="সুপর্ণকান্তি ঘোষ",
        genre=MODERN,
        release_year=1983,
    ),
    Song(
        title="আমার সোনার বাংলা",
        artist=TAGORE,
        lyricist=TAGORE,
        composer=TAGORE,
        genre=RABINDRA_SANGEET,
        release_year=1905,
        lyrics=(
            "আমার সোনার বাংলা, আমি তোমায় ভালোবাসি।\n"
            "চিরদিন তোমার আকাশ, তোমার বাতাস, আমার প্রাণে বাজায় বাঁশি॥"
        ),
    ),
    Song(
        title="মানুষ মানুষের জন্যে",
        artist="ভূপেন হাজারিকা",
        lyricist="ভূপেন হাজারিকা",
        composer="ভূপেন হাজারিকা",
        genre=MODERN,
    ),
    Song(
        title="যদি তোর ডাক শুনে কেউ না আসে",
        artist=TAGORE,
        lyricist=TAGORE,
        composer=TAGORE,
        album="বাউল",
        genre=RABINDRA_SANGEET,
        release_year=1905,
        lyrics=(
            "যদি তোর ডাক শুনে কেউ না আসে তবে একলা চলো রে।\n"
            "একলা চলো, একলা চলো, একলা চলো, একলা চলো রে॥"
        ),
    ),
    Song(
        title="একতারা তুই দেশের কথা",
        artist="শাহনাজ রহমতউল্লাহ",
        lyricist="গাজী মাজহারুল আনোয়ার",
        composer="আনোয়ার পারভেজ",
        genre=PATRIOTIC,
    ),
    Song(
        title="পুরানো সেই দিনের কথা",
        artist=TAGORE,
        lyricist=TAGORE,
        composer=TAGORE,
        genre=RABINDRA_SANGEET,
        lyrics=(
            "পুরানো সেই দিনের কথা ভুলবি কি রে হায়।\n"
            "ও সেই চোখের দেখা, প্রাণের কথা, সে কি ভোলা যায়।"
        ),
    ),
    Song(
        title="কারার ঐ লৌহকপাট",
        artist=NAZRUL,
        lyricist=NAZRUL,
        composer=NAZRUL,
        genre=NAZRUL_GEETI,
        release_year=1922,
        lyrics="কারার ঐ লৌহকপাট, ভেঙে ফেল কর রে লোপাট।",
    ),
    Song(
        title="আমি বাংলায় গান গাই",
        artist="প্রতুল মুখোপাধ্যায়",
        lyricist="প্রতুল মুখোপাধ্যায়",
        composer="প্রতুল মুখোপাধ্যায়",
        genre=MODERN,
    ),
    Song(
        title="খাঁচার ভিতর অচিন পাখি",
        artist="লালন ফকির",
        lyricist="লালন ফকির",
        composer="প্রচলিত",
        genre="বাউল",
        lyrics=(
            "খাঁচার ভিতর অচিন পাখি কেমনে আসে যায়।\n"
            "ধরতে পারলে মনোবেড়ি দিতাম পাখির পায়॥"
        ),
    ),
    Song(
        title="আগুনের পরশমণি ছোঁয়াও প্রাণে",
        artist=TAGORE,
        lyricist=TAGORE,
        composer=TAGORE,
        album="পূজা",
        genre=RABINDRA_SANGEET,
        lyrics="আগুনের পরশমণি ছোঁয়াও প্রাণে।\nএ জীবন পুণ্য করো দহন-দানে॥",
    ),
    Song(
        title="ধনধান্য পুষ্পভরা",
        artist="বিভিন্ন শিল্পী",
        lyricist="দ্বিজেন্দ্রলাল রায়",
        composer="দ্বিজেন্দ্রলাল রায়",
        genre=PATRIOTIC,
        lyrics=(
            "ধনধান্য পুষ্পভরা আমাদের এই বসুন্ধরা,\n"
            "তাহার মাঝে আছে দেশ এক সকল দেশের সেরা।"
        ),
    ),
    Song(
        title="মোরা ঝঞ্ঝার মতো উদ্দাম",
        artist=NAZRUL,
        lyricist=NAZRUL,
        composer=NAZRUL,
        genre=NAZRUL_GEETI,
    ),
    Song(
        title="এই পথ যদি না শেষ হয়",
        artist="হেমন্ত মুখোপাধ্যায় ও সন্ধ্যা মুখোপাধ্যায়",
        lyricist="গৌরীপ্রসন্ন মজুমদার",
        composer="হেমন্ত মুখোপাধ্যায়",
        album="সপ্তপদী",
        genre=FILM,
        release_year=1961,
    ),
    Song(
        title="বড় লোকের বিটি লো",
        artist="Various Artists",
        lyricist="সংগৃহীত",
        composer="প্রচলিত",
        genre="লোকগীতি",
    ),
    Song(
        title="আমি চিনি গো চিনি তোমারে",
        artist=TAGORE,
        lyricist=TAGORE,
        composer=TAGORE,
        genre=RABINDRA_SANGEET,
        lyrics="আমি চিনি গো চিনি তোমারে, ওগো বিদেশিনী।\nতুমি থাকো সিন্ধুপারে ওগো বিদেশিনী॥",
    ),
    Song(
        title="Tomake Chai",
        artist="Arijit Singh",
        lyricist="প্রসেন",
        composer="অরিন্দম চট্টোপাধ্যায়",
        album="Gangster",
        genre=FILM,
        release_year=2016,
    ),
    Song(
        title="নমুনা গান",
        artist="অজানা শিল্পী",
        genre=PLACEHOLDER_GENRE,
        lyrics=LYRICS_UNAVAILABLE,
    ),
)

# Titles the home page always features for the priority artist.
PRIORITY_HITS: Tuple[str, ...] = (
    "আমার সোনার বাংলা",
    "যদি তোর ডাক শুনে কেউ না আসে",
)

__all__ = ["PRIORITY_HITS", "SONGS", "TAGORE"]
