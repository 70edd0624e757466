"""Tests for the layout engine: page breaks, overflow, numbering and bands."""
import pytest

from clearance_report.config import IMAGE_ERROR_TEXT, PHOTO_MAX_HEIGHT
from clearance_report.document_builder import (
    BulletBlock,
    FixedPageSpec,
    FlowingPageSpec,
    HeadingBlock,
    ImageBlock,
    ParagraphBlock,
    SpacerBlock,
    TableBlock,
)
from clearance_report.exceptions import UnsupportedBlockError, UnsupportedPageError
from conftest import FOOTER_CAPTION

PARAGRAPH = (
    "The LAA found no visible asbestos residue from asbestos removal work in the "
    "asbestos removal area, or in the vicinity of the area, where the asbestos "
    "removal works were carried out. "
) * 4

CONTENT_KINDS = {"text", "bullet", "spacer", "caption", "table_header", "table_row", "image", "image_error"}


class CalloutBlock:
    """A block type the engine does not know how to place."""

    text = "Unsupported"


def flowing(blocks):
    return FlowingPageSpec(blocks=list(blocks))


def test_fixed_pages_are_not_numbered_and_flowing_pages_start_at_one(engine, ctx):
    plan = [
        FixedPageSpec(kind="cover", title="CERTIFICATE", subtitle="Clearance Inspection Report"),
        FixedPageSpec(kind="version_control", title="CERTIFICATE", revisions=(("1", "25/07/2024", "Initial issue"),)),
        flowing([ParagraphBlock(PARAGRAPH)] * 12),
    ]
    engine.render(ctx, plan, {})

    kinds = [page.kind for page in ctx.pages]
    assert kinds[:2] == ["cover", "version_control"]
    assert all(kind == "flowing" for kind in kinds[2:])
    assert len(kinds) >= 4

    for fixed in ctx.pages[:2]:
        assert fixed.number is None
        assert fixed.labels("footer") == []
        assert fixed.labels("header") == []

    numbered = ctx.pages[2:]
    assert [page.number for page in numbered] == list(range(1, len(numbered) + 1))
    for page in numbered:
        assert page.labels("footer") == [f"{FOOTER_CAPTION}|{page.number}"]
        assert page.footer_caption == FOOTER_CAPTION
        assert len(page.labels("header")) == 1


def test_each_flowing_page_spec_starts_a_new_page(engine, ctx):
    plan = [flowing([ParagraphBlock("Main body")]), flowing([ParagraphBlock("Background")])]
    engine.render(ctx, plan, {})
    assert [page.labels("text") for page in ctx.pages] == [["Main body"], ["Background"]]
    assert [page.number for page in ctx.pages] == [1, 2]


def test_content_stays_between_bands(engine, ctx, bands):
    engine.render(ctx, [flowing([HeadingBlock("HEADING"), ParagraphBlock(PARAGRAPH)] * 10)], {})
    top, bottom = bands.content_top(ctx), bands.bottom_limit(ctx)
    for page in ctx.pages:
        for element in page.elements:
            if element.kind in CONTENT_KINDS:
                assert element.top >= top - 0.01
                assert element.bottom <= bottom + 0.01


def test_cursor_is_monotonic_within_a_page(engine, ctx):
    blocks = [HeadingBlock("HEADING"), ParagraphBlock(PARAGRAPH), BulletBlock("one"), BulletBlock("two"),
              SpacerBlock(20), TableBlock(headers=["A", "B"], rows=[["1", "x"]] * 30, column_widths=[100, 200])]
    engine.render(ctx, [flowing(blocks * 3)], {})
    for page in ctx.pages:
        tops = [e.top for e in page.elements if e.kind in CONTENT_KINDS]
        assert tops == sorted(tops)
        for earlier, later in zip(page.elements, page.elements[1:]):
            if earlier.kind in CONTENT_KINDS and later.kind in CONTENT_KINDS:
                assert later.top >= earlier.bottom - 0.01


def test_block_taller_than_page_overflows_at_content_top(engine, ctx, bands):
    huge = ParagraphBlock(PARAGRAPH * 40)
    engine.render(ctx, [flowing([ParagraphBlock("Lead-in"), huge, ParagraphBlock("After")])], {})

    first, second = ctx.pages[0], ctx.pages[1]
    assert first.labels("text") == ["Lead-in"]
    element = second.elements[[e.kind for e in second.elements].index("text")]
    assert element.label == huge.text
    assert element.top == pytest.approx(bands.content_top(ctx))
    assert element.bottom > bands.bottom_limit(ctx)
    # Rendering continues on the next page
    assert ctx.pages[2].labels("text") == ["After"]


def test_spacer_is_dropped_at_top_of_page(engine, ctx):
    engine.render(ctx, [flowing([SpacerBlock(40), ParagraphBlock("First")])], {})
    assert ctx.pages[0].labels("spacer") == []


def test_unknown_block_aborts_render(engine, ctx):
    with pytest.raises(UnsupportedBlockError) as excinfo:
        engine.render(ctx, [flowing([ParagraphBlock("ok"), CalloutBlock()])], {})
    assert "CalloutBlock" in str(excinfo.value)


def test_unknown_page_variant_aborts_render(engine, ctx):
    with pytest.raises(UnsupportedPageError):
        engine.render(ctx, ["not a page"], {})
    with pytest.raises(UnsupportedPageError):
        engine.render(ctx, [FixedPageSpec(kind="site_plan")], {})


def test_image_is_bounded_and_centred(engine, ctx, jpeg_bytes):
    engine.render(ctx, [flowing([ImageBlock("photo", caption="Photograph 1")])], {"photo": jpeg_bytes})
    page = ctx.pages[0]
    image = [e for e in page.elements if e.kind == "image"][0]
    assert image.height <= PHOTO_MAX_HEIGHT
    assert page.labels("caption") == ["Photograph 1"]
    assert ctx.missing_assets == []


def test_unloadable_image_becomes_error_text_and_render_continues(engine, ctx):
    blocks = [ParagraphBlock("Before"), ImageBlock("item-1-photo"), ParagraphBlock("After")]
    engine.render(ctx, [flowing(blocks)], {"item-1-photo": b"corrupt"})

    page = ctx.pages[0]
    labels = [e.label for e in page.elements if e.kind in CONTENT_KINDS]
    assert labels == ["Before", IMAGE_ERROR_TEXT, "After"]
    assert page.labels("image_error") == [IMAGE_ERROR_TEXT]
    assert ctx.missing_assets == ["item-1-photo"]


def test_missing_asset_entry_uses_placeholder(engine, ctx):
    engine.render(ctx, [flowing([ImageBlock("logo-art")])], {})
    assert ctx.pages[0].labels("image_error") == [IMAGE_ERROR_TEXT]


def test_table_header_not_left_alone_at_page_bottom(engine, ctx, bands):
    filler = [ParagraphBlock(PARAGRAPH)] * 6
    table = TableBlock(headers=["A", "B"], rows=[["1", "x"], ["2", "y"]], column_widths=[100, 200],
                       caption="Table 1")
    engine.render(ctx, [flowing(filler + [table])], {})
    for page in ctx.pages:
        if page.labels("table_header"):
            assert page.labels("table_row")
