"""Tests for block-flow pagination."""

import pytest

from docsynth.config import LayoutConfig, PageGeometry
from docsynth.engine.blocks import ListBlock, ParagraphBlock, SectionBlock, SignatureBlock, TitleBlock
from docsynth.engine.chrome import ChromeContent, StandardChrome
from docsynth.engine.pagination import BlockFlowLayout, BlockStyles
from docsynth.exceptions import LayoutError
from tests.helpers import FakeSurface


def long_text(words: int) -> str:
    return " ".join(f"word{index}" for index in range(words))


@pytest.fixture
def layout(fake_surface_factory):
    return BlockFlowLayout(LayoutConfig(), surface_factory=fake_surface_factory)


class TestMeasureAndRender:
    """Measured height must equal the rendered advance for every block kind."""

    @pytest.mark.parametrize("block", [
        TitleBlock("Minutes of the annual general meeting"),
        SectionBlock("Attendance"),
        ParagraphBlock(long_text(120)),
        ParagraphBlock(""),
        ListBlock(("First item", long_text(60), "Third"), numbered=True),
        ListBlock(("Bullet", long_text(40))),
        ListBlock(()),
        SignatureBlock("Jane Doe", "John Roe"),
    ])
    def test_measure_equals_render_advance(self, layout, block):
        surface = FakeSurface()
        measured = layout.measure(surface, block)
        start = 250.0
        assert layout.render(surface, block, start) - start == pytest.approx(measured)

    def test_measure_does_not_draw(self, layout):
        surface = FakeSurface()
        layout.measure(surface, ParagraphBlock(long_text(50)))
        layout.measure(surface, TitleBlock("Heading"))
        assert surface.calls == []

    def test_paragraph_height(self, layout):
        styles = BlockStyles()
        surface = FakeSurface()
        # 15px font, 7.5px per character in the fake surface, 1000px body
        height = layout.measure(surface, ParagraphBlock("short"))
        assert height == styles.paragraph.resolved_line_height + styles.paragraph_spacing

    def test_title_is_underlined_under_widest_line(self, layout):
        surface = FakeSurface()
        layout.render(surface, TitleBlock("Agenda"), 96)

        (line,) = surface.lines()
        styles = BlockStyles()
        underline_y = 96 + styles.title.resolved_line_height + styles.underline_gap
        assert line[1:5] == (120, underline_y, 120 + len("Agenda") * 9, underline_y)

    def test_list_uses_hanging_indent(self, layout):
        surface = FakeSurface()
        layout.render(surface, ListBlock((long_text(40),), numbered=True), 96)

        texts = surface.texts()
        marker = texts[0]
        assert marker[1] == "1."
        assert marker[2] == 120 + 28

        text_x = 120 + 28 + len("1. ") * 7.5
        body = texts[1:]
        assert len(body) > 1
        assert all(call[2] == text_x for call in body)

    def test_bullet_marker(self, layout):
        surface = FakeSurface()
        layout.render(surface, ListBlock(("a", "b")), 96)
        assert surface.text_values() == ["•", "a", "•", "b"]

    def test_signature_draws_two_lines_and_captions(self, layout):
        surface = FakeSurface()
        advance = layout.render(surface, SignatureBlock("Jane Doe", "John Roe"), 400) - 400

        assert advance == BlockStyles().signature_height
        lines = surface.lines()
        assert [line[1] for line in lines] == [120, 1240 - 120 - 280]
        assert set(surface.text_values()) == {"Jane Doe", "John Roe", "CHAIRPERSON", "SECRETARY"}

    def test_unknown_block_raises(self, layout):
        with pytest.raises(LayoutError):
            layout.measure(FakeSurface(), object())


class TestPaginate:
    """Test suite for BlockFlowLayout.paginate."""

    def test_empty_input_gives_one_page(self, layout, fake_surface_factory):
        pages = layout.paginate([])
        assert len(pages) == 1
        assert fake_surface_factory.created == pages

    def test_long_paragraph_moves_wholly_to_next_page(self, layout):
        filler = [ParagraphBlock(f"Line {index}") for index in range(30)]
        long_paragraph = ParagraphBlock("TAIL " + long_text(200))

        scratch = FakeSurface()
        used = sum(layout.measure(scratch, block) for block in filler)
        remaining = 1560 - 96 - used
        assert 0 < remaining < layout.measure(scratch, long_paragraph)

        pages = layout.paginate(filler + [long_paragraph])

        assert len(pages) == 2
        assert not any(text.startswith("TAIL") for text in pages[0].text_values())
        first_on_second = pages[1].texts()[0]
        assert first_on_second[1].startswith("TAIL")
        assert first_on_second[3] == 96

    def test_blocks_keep_order_across_pages(self, layout):
        blocks = [ParagraphBlock(f"P{index:03d} " + long_text(30)) for index in range(40)]
        pages = layout.paginate(blocks)

        seen = [text[:4] for page in pages for text in page.text_values() if text.startswith("P0")]
        assert seen == [f"P{index:03d}" for index in range(40)]
        assert len(pages) > 1

    def test_no_page_exceeds_body_bottom(self, layout):
        blocks = [SectionBlock("Section"), ParagraphBlock(long_text(90))] * 10
        pages = layout.paginate(blocks)
        for page in pages:
            assert all(call[3] < 1560 for call in page.texts())

    def test_oversized_block_does_not_leave_blank_page(self, layout):
        huge = ParagraphBlock(long_text(3000))
        assert len(layout.paginate([huge])) == 1
        assert len(layout.paginate([ParagraphBlock("intro"), huge])) == 2

    def test_invalid_body_area(self):
        config = LayoutConfig(page=PageGeometry(body_top=500, body_bottom=400))
        with pytest.raises(LayoutError):
            BlockFlowLayout(config, surface_factory=FakeSurface)


class TestStandardChrome:
    """Test suite for the header and footer."""

    def test_footer_on_every_page(self, fake_surface_factory):
        geometry = PageGeometry()
        chrome = StandardChrome(geometry, ChromeContent(organization="Acme Group", title="Minutes",
                                                        generated_on="2024-05-01"))
        layout = BlockFlowLayout(LayoutConfig(page=geometry), surface_factory=fake_surface_factory,
                                 chrome=chrome)
        pages = layout.paginate([ParagraphBlock(long_text(90))] * 12)

        assert len(pages) >= 2
        for number, page in enumerate(pages, start=1):
            texts = page.text_values()
            assert f"Page {number} of {len(pages)}" in texts
            assert "Generated by docsynth on 2024-05-01" in texts
            assert "Acme Group" in texts
            assert "AG" in texts

    def test_single_page_label(self, fake_surface):
        chrome = StandardChrome(PageGeometry(), ChromeContent(show_header=False))
        chrome.draw(fake_surface, 1, 1)
        texts = fake_surface.text_values()
        assert "Page 1" in texts
        assert "Acme Group" not in texts
        page_label = [call for call in fake_surface.texts() if call[1] == "Page 1"][0]
        assert page_label[2] == 1240 - 120
        assert page_label[3] == 1754 - 100

    def test_body_top_clears_header(self):
        geometry = PageGeometry()
        assert StandardChrome(geometry).body_top() == StandardChrome.header_bottom
        assert StandardChrome(geometry, ChromeContent(show_header=False)).body_top() == geometry.body_top
