"""Gallery collection, layout and navigation."""
from __future__ import annotations

import pytest

from kabar.schemas import Post
from kabar.services.gallery import clamp_index, collect_images, gallery_layout, parse_image_index, wrap_index


def _urls(count: int) -> list[str]:
    return [f"https://cdn.test/{n}.png" for n in range(count)]


def test_collect_images_featured_first_and_skips_blanks():
    post = Post.model_validate(
        {
            "postId": "p1",
            "mediaUrl": "https://cdn.test/featured.png",
            "sections": [
                {"type": "link", "src": "https://example.com"},
                {"type": "image", "imageDetail": ["https://cdn.test/a.png", " ", "", "https://cdn.test/b.png"]},
            ],
        }
    )

    assert collect_images(post) == [
        "https://cdn.test/featured.png",
        "https://cdn.test/a.png",
        "https://cdn.test/b.png",
    ]


@pytest.mark.parametrize(
    "count, kind, shown",
    [(1, "single", 1), (2, "pair", 2), (3, "featured-2", 3), (4, "featured-3", 4), (5, "featured-4", 5), (6, "featured-5", 6), (9, "featured-5", 6)],
)
def test_gallery_layout_kinds(count, kind, shown):
    layout = gallery_layout(_urls(count))

    assert layout.kind == kind
    assert len(layout.tiles) == shown
    assert layout.total == count


def test_overflow_badge_only_when_images_are_hidden():
    assert gallery_layout(_urls(6)).tiles[-1].overflow == 0
    tiles = gallery_layout(_urls(9)).tiles
    assert tiles[-1].overflow == 3
    assert all(tile.overflow == 0 for tile in tiles[:-1])


def test_blurred_marks_featured_tile_only():
    tiles = gallery_layout(_urls(3), blurred=True).tiles

    assert [tile.blurred for tile in tiles] == [True, False, False]
    assert tiles[0].featured is True


def test_empty_gallery():
    assert gallery_layout([]).tiles == []


def test_lightbox_wraps_and_detail_clamps():
    assert wrap_index(4, 1, 5) == 0
    assert wrap_index(0, -1, 5) == 4
    assert clamp_index(-1, 5) == 0
    assert clamp_index(9, 5) == 4


@pytest.mark.parametrize("raw, expected", [("2", 2), ("-1", 0), ("abc", 0), (None, 0), ("99", 4)])
def test_parse_image_index(raw, expected):
    assert parse_image_index(raw, 5) == expected
