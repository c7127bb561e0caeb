"""Multi-section post composer."""
from __future__ import annotations

import asyncio
from datetime import date

import pytest

from conftest import png
from kabar.clients.image_host import ImageValidationError, PendingImage
from kabar.schemas import Post
from kabar.services.composer_service import (
    ComposerAuthor,
    ComposerError,
    ComposerValidationError,
    PostComposer,
    apply_action,
    image_limit_for,
    post_limit_reached,
    replay_sections,
    local_zone,
    scheduled_at_iso,
)

AUTHOR = ComposerAuthor(user_id="u1", username="sari", profile_pic="https://cdn.test/sari.png")


class RecordingUploader:
    def __init__(self) -> None:
        self.uploaded: list[str] = []

    async def __call__(self, image: PendingImage) -> str:
        self.uploaded.append(image.filename)
        return f"https://cdn.test/{image.filename}"


def _valid(**overrides) -> PostComposer:
    composer = PostComposer(role="member", title="Kabar hari ini", category="NEWS")
    for key, value in overrides.items():
        setattr(composer, key, value)
    return composer


def test_new_sections_start_with_type_defaults():
    composer = PostComposer()
    code = composer.add_section("code")
    image = composer.add_section("image")
    link = composer.add_section("link")

    assert (code.content, code.src, code.order) == ("", None, 0)
    assert (image.src, len(image.images), image.order) == ("", 1, 1)
    assert (link.content, link.src, link.order) == (None, "", 2)


def test_only_one_section_per_type():
    composer = PostComposer()
    composer.add_section("code")

    with pytest.raises(ComposerError, match="Only one Copy Text Section is allowed."):
        composer.add_section("code")


def test_move_and_remove_renumber_orders():
    composer = PostComposer()
    for kind in ("image", "code", "link"):
        composer.add_section(kind)

    composer.move_section(2, "up")
    assert [section.type for section in composer.sections] == ["image", "link", "code"]
    assert [section.order for section in composer.sections] == [0, 1, 2]

    composer.remove_section(0)
    assert [(section.type, section.order) for section in composer.sections] == [("link", 0), ("code", 1)]


def test_move_is_noop_at_edges():
    composer = PostComposer()
    composer.add_section("image")
    composer.add_section("code")

    composer.move_section(0, "up")
    composer.move_section(1, "down")

    assert [section.type for section in composer.sections] == ["image", "code"]


@pytest.mark.parametrize(
    "role, expected",
    [("member", 5), ("vip", 5), ("god", 30), ("owner", None), ("admin", None), ("mod", None), (None, 5)],
)
def test_image_limit_by_role(role, expected):
    assert image_limit_for(role) == expected


def test_add_image_slot_stops_at_limit():
    composer = PostComposer(role="member")
    composer.add_section("image")
    for _ in range(4):
        composer.add_image_slot(0)

    with pytest.raises(ComposerError, match="You can only add up to 5 images per section."):
        composer.add_image_slot(0)


def test_privileged_roles_have_no_image_limit():
    composer = PostComposer(role="admin")
    composer.add_section("image")
    for _ in range(40):
        composer.add_image_slot(0)

    assert len(composer.sections[0].images) == 41


def test_attach_image_clears_typed_url_and_notices_limit():
    composer = PostComposer(role="member")
    composer.add_section("image")
    for _ in range(4):
        composer.add_image_slot(0)
    composer.set_image_url(0, 0, "https://example.com/a.png")

    for slot in range(5):
        composer.attach_image(0, slot, png(f"{slot}.png"))

    assert composer.sections[0].images[0].url == ""
    assert composer.notices == ["You have added 5 images. This is the maximum allowed per section."]


def test_attach_image_rejects_non_images_and_large_files():
    composer = PostComposer()
    composer.add_section("image")

    with pytest.raises(ImageValidationError, match="File must be an image"):
        composer.attach_image(0, 0, PendingImage("a.pdf", "application/pdf", b"%PDF"))
    with pytest.raises(ImageValidationError, match="less than 3MB"):
        composer.attach_image(0, 0, PendingImage("big.png", "image/png", b"0" * (3 * 1024 * 1024 + 1)))


def test_remove_featured_image_clears_url_and_file():
    composer = _valid(media_url="https://example.com/f.png")
    composer.set_featured_image(png("featured.png"))

    composer.remove_featured_image()

    assert composer.media_url == ""
    assert composer.featured_image is None


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": "  ab  "}, "Title must be at least 3 characters"),
        ({"description": "x" * 5001}, "Description max 500 characters"),
        ({"description": "x" * 4999 + "   "}, "Description max 500 characters"),
        ({"category": ""}, "Category is required"),
        ({"category": "__CUSTOM__", "custom_category": "   "}, "Category is required"),
    ],
)
def test_validation_reports_first_issue(overrides, message):
    with pytest.raises(ComposerValidationError, match=message):
        _valid(**overrides).validate()


def test_custom_category_is_resolved():
    composer = _valid(category="__CUSTOM__", custom_category=" Kuliner ")

    assert composer.resolved_category == "Kuliner"


def test_scheduled_at_converts_local_time_to_utc():
    assert scheduled_at_iso(date(2026, 10, 19), "08:30", tz_offset_minutes=-420) == "2026-10-19T01:30:00.000Z"
    assert scheduled_at_iso(date(2026, 10, 19), "23:15:05", tz_offset_minutes=60) == "2026-10-20T00:15:05.000Z"


@pytest.mark.parametrize("role, count, reached", [("member", 1, True), ("member", 0, False), ("vip", 5, True), ("god", 19, False), ("admin", 500, False)])
def test_post_limit_by_role(role, count, reached):
    assert post_limit_reached(role, count) is reached


def test_submit_uploads_featured_first_then_section_files():
    composer = _valid(description="Isi", blurred=True)
    composer.set_featured_image(png("featured.png"))
    composer.add_section("code")
    composer.update_section(0, content="print('hai')")
    composer.add_section("html")
    composer.add_section("image")
    composer.add_image_slot(2)
    composer.add_image_slot(2)
    composer.attach_image(2, 0, png("one.png"))
    composer.set_image_url(2, 1, "https://example.com/typed.png")
    composer.attach_image(2, 2, png("three.png"))
    uploader = RecordingUploader()

    payload = asyncio.run(composer.submit(uploader, author=AUTHOR))

    assert uploader.uploaded == ["featured.png", "one.png", "three.png"]
    assert payload["mediaUrl"] == "https://cdn.test/featured.png"
    assert payload["sections"] == [
        {"type": "code", "content": "print('hai')", "src": None, "order": 0},
        {
            "type": "image",
            "content": None,
            "src": None,
            "order": 2,
            "imageDetail": [
                "https://cdn.test/one.png",
                "https://example.com/typed.png",
                "https://cdn.test/three.png",
            ],
        },
    ]
    assert payload["author"] == {"userId": "u1", "username": "sari", "profilePic": "https://cdn.test/sari.png"}
    assert payload["blurred"] is True
    assert payload["isScheduled"] is False
    assert "scheduledAt" not in payload


def test_submit_omits_empty_media_url_and_blank_slots():
    composer = _valid()
    composer.add_section("image")
    uploader = RecordingUploader()

    payload = asyncio.run(composer.submit(uploader, author=ComposerAuthor(user_id="u1", username="sari")))

    assert "mediaUrl" not in payload
    assert payload["sections"][0]["imageDetail"] == []
    assert payload["author"] == {"userId": "u1", "username": "sari"}


def test_submit_uploads_nothing_when_invalid():
    composer = _valid(title="ab")
    composer.set_featured_image(png("featured.png"))
    uploader = RecordingUploader()

    with pytest.raises(ComposerValidationError):
        asyncio.run(composer.submit(uploader, author=AUTHOR))

    assert uploader.uploaded == []


def test_submit_includes_schedule():
    composer = _valid(is_scheduled=True, scheduled_date=date(2026, 12, 1), scheduled_time="10:00", tz_offset_minutes=-420)

    payload = asyncio.run(composer.submit(RecordingUploader(), author=AUTHOR))

    assert payload["isScheduled"] is True
    assert payload["scheduledAt"] == "2026-12-01T03:00:00.000Z"


def test_replay_sections_rebuilds_state_with_files():
    composer = PostComposer(role="member")
    state = [
        {"type": "link", "src": "https://example.com"},
        {"type": "image", "images": ["https://example.com/a.png", ""]},
    ]

    replay_sections(composer, state, {"section_image_1_1": png("b.png")})

    assert composer.sections[0].src == "https://example.com"
    slots = composer.sections[1].images
    assert [slot.url for slot in slots] == ["https://example.com/a.png", ""]
    assert slots[1].pending.filename == "b.png"
    assert composer.sections_state()[1] == {
        "type": "image",
        "content": None,
        "src": "",
        "images": ["https://example.com/a.png", ""],
    }


def test_replay_enforces_one_section_per_type():
    with pytest.raises(ComposerError, match="Only one Video Section is allowed."):
        replay_sections(PostComposer(), [{"type": "video"}, {"type": "video"}], {})


def test_replay_enforces_image_limit():
    state = [{"type": "image", "images": [f"https://example.com/{n}.png" for n in range(6)]}]

    with pytest.raises(ComposerError, match="up to 5 images"):
        replay_sections(PostComposer(role="member"), state, {})


def test_apply_action_dispatches_editor_buttons():
    composer = PostComposer()
    apply_action(composer, "add_section:code")
    apply_action(composer, "add_section:image")
    apply_action(composer, "add_image:1")
    apply_action(composer, "move_section:1:up")
    apply_action(composer, "remove_image:0:0")

    assert [section.type for section in composer.sections] == ["image", "code"]
    assert len(composer.sections[0].images) == 1

    apply_action(composer, "remove_section:1")
    assert [section.type for section in composer.sections] == ["image"]


@pytest.mark.parametrize("action", ["explode", "move_section:0:sideways", "remove_section:x", "add_section:gif"])
def test_apply_action_rejects_unknown_actions(action):
    composer = PostComposer()
    composer.add_section("code")

    with pytest.raises(ComposerError):
        apply_action(composer, action)


def test_from_post_loads_edit_draft():
    post = Post.model_validate(
        {
            "postId": "p1",
            "title": "Lama",
            "category": "Kuliner",
            "mediaUrl": "https://cdn.test/f.png",
            "isScheduled": True,
            "scheduledAt": "2026-11-02T03:04:05.000Z",
            "sections": [
                {"type": "link", "src": "https://example.com", "order": 1},
                {"type": "image", "imageDetail": ["https://cdn.test/a.png"], "order": 0},
            ],
        }
    )

    composer = PostComposer.from_post(post, role="vip")

    assert composer.mode == "edit"
    assert composer.post_id == "p1"
    assert (composer.category, composer.custom_category) == ("__CUSTOM__", "Kuliner")
    assert [section.type for section in composer.sections] == ["image", "link"]
    assert composer.sections[0].images[0].url == "https://cdn.test/a.png"
    assert composer.scheduled_date == date(2026, 11, 2)
    assert composer.scheduled_time == "03:04:05"
    assert composer.scheduled_utc is not None


def test_loaded_schedule_is_resent_unchanged_for_any_offset():
    post = Post.model_validate(
        {"postId": "p1", "title": "Lama", "category": "NEWS", "isScheduled": True, "scheduledAt": "2026-12-01T10:00:00.000Z"}
    )
    composer = PostComposer.from_post(post)
    composer.tz_offset_minutes = -420

    payload = asyncio.run(composer.submit(RecordingUploader(), author=AUTHOR))

    assert payload["scheduledAt"] == "2026-12-01T10:00:00.000Z"


@pytest.mark.parametrize("minutes", [1440, -1440, 99999])
def test_timezone_offset_must_stay_within_a_day(minutes):
    with pytest.raises(ComposerValidationError, match="Invalid timezone offset"):
        local_zone(minutes)
    with pytest.raises(ComposerValidationError, match="Invalid timezone offset"):
        scheduled_at_iso(date(2026, 12, 1), "10:00", tz_offset_minutes=minutes)


def test_offset_limits_are_accepted():
    assert scheduled_at_iso(date(2026, 12, 1), "10:00", tz_offset_minutes=1439) == "2026-12-02T09:59:00.000Z"
    assert scheduled_at_iso(date(2026, 12, 1), "10:00", tz_offset_minutes=-1439) == "2026-11-30T10:01:00.000Z"
