"""Tests for the document layout engine."""
from datetime import date

import pytest
from reportlab.lib.units import mm

from deepsearch.document.layout import MARGIN, PAGE_HEIGHT, DocumentLayoutEngine, format_date
from deepsearch.document.model import FillRect, Line, TextRun
from deepsearch.models.schemas import ContentBlock
from deepsearch.models.stages import STAGES
from deepsearch.services.synthesizer import source_for, synthesize

GENERATED_ON = date(2026, 10, 18)


def stage_blocks(topic: str) -> list[ContentBlock]:
    return [
        ContentBlock(
            title=stage.perspective_label,
            content=synthesize(topic, stage),
            source=source_for(stage),
        )
        for stage in STAGES
    ]


def block(title: str, content: str = "Short body.") -> ContentBlock:
    return ContentBlock(title=title, content=content, source=f"Source for {title}")


@pytest.fixture
def engine():
    return DocumentLayoutEngine(subtitle="Deep Research Report")


def find_page(document, text):
    """1-based number of the first page holding a text run equal to `text`."""
    for page in document.pages:
        if text in page.texts():
            return page.number
    return None


def footer_text(topic, number, total):
    return f"{topic} - Page {number} of {total}"


class TestRenewableEnergyScenario:
    @pytest.fixture
    def document(self, engine):
        return engine.layout("Renewable Energy", stage_blocks("Renewable Energy"), GENERATED_ON)

    def test_page_count_covers_cover_toc_and_sections(self, document):
        assert document.page_count >= 10
        assert [page.number for page in document.pages] == list(range(1, document.page_count + 1))

    def test_toc_entries_resolve_to_section_labels(self, document):
        assert len(document.toc) == 8
        for entry in document.toc:
            assert entry.page == find_page(document, f"SECTION {entry.index + 1}")

    def test_third_toc_link_points_at_section_three(self, document):
        toc_page = document.page(2)
        entry = next(run for run in toc_page.links() if run.text.startswith("3. "))

        assert entry.text == "3. Current Trends"
        assert entry.link_page == find_page(document, "SECTION 3")

    def test_toc_shows_resolved_page_numbers(self, document):
        numbers = [run for run in document.page(2).links() if run.align == "right"]
        assert [run.text for run in numbers] == [str(entry.page) for entry in document.toc]

    def test_cover_page(self, document):
        cover = document.page(1)
        assert isinstance(cover.ops[0], FillRect)
        assert "RENEWABLE ENERGY" in cover.texts()
        assert "Deep Research Report" in cover.texts()
        assert "October 18, 2026" in cover.texts()

    def test_footers_on_every_page_but_cover(self, document):
        total = document.page_count
        assert not any("Page 1 of" in text for text in document.page(1).texts())
        for page in document.pages[1:]:
            assert footer_text("Renewable Energy", page.number, total) in page.texts()

    def test_each_section_has_source_and_divider(self, document):
        for entry in document.toc:
            page = document.page(entry.page)
            assert f"Source: Deep Research Analysis - {entry.title}" in page.texts()
            assert any(isinstance(op, Line) for op in page.ops)


class TestEdgeCases:
    def test_zero_blocks_gives_cover_and_empty_toc(self, engine):
        document = engine.layout("Solar", [], GENERATED_ON)

        assert document.page_count == 2
        assert document.toc == []
        assert document.page(2).links() == []
        assert "Table of Contents" in document.page(2).texts()
        assert footer_text("Solar", 2, 2) in document.page(2).texts()
        assert not any("Page" in text for text in document.page(1).texts())

    def test_long_section_spans_pages_with_single_toc_entry(self, engine):
        long_body = " ".join(f"word{i}" for i in range(3000))
        blocks = [block("Long", long_body), block("After")]

        document = engine.layout("Topic", blocks, GENERATED_ON)

        assert len(document.toc) == 2
        assert document.toc[0].page == 3
        assert document.toc[1].page == find_page(document, "SECTION 2")
        assert document.toc[1].page > 4
        assert document.page_count == document.toc[1].page

    def test_body_never_crosses_bottom_margin(self, engine):
        long_body = " ".join(f"word{i}" for i in range(3000))
        document = engine.layout("Topic", [block("Long", long_body)], GENERATED_ON)

        footer_y = PAGE_HEIGHT - 10 * mm
        for page in document.pages[1:]:
            for op in page.ops:
                if isinstance(op, TextRun) and op.y != footer_y:
                    assert MARGIN <= op.y <= PAGE_HEIGHT - MARGIN

    def test_many_entries_continue_toc_on_next_page(self, engine):
        blocks = [block(f"Topic {i}") for i in range(40)]

        document = engine.layout("Many", blocks, GENERATED_ON)

        assert find_page(document, "SECTION 1") == 4
        assert document.page_count == 43
        for entry in document.toc:
            assert entry.page == find_page(document, f"SECTION {entry.index + 1}")
        toc_links = document.page(2).links() + document.page(3).links()
        assert len([run for run in toc_links if run.align == "left"]) == 40

    def test_long_titles_are_wrapped_in_section_and_truncated_in_toc(self, engine):
        title = "An extraordinarily long section title " * 6
        document = engine.layout("Topic", [block(title.strip())], GENERATED_ON)

        entry = document.page(2).links()[0]
        assert entry.text.startswith("1. An extraordinarily")
        assert entry.text.endswith("...")
        section_titles = [
            op for op in document.page(3).ops if isinstance(op, TextRun) and op.size == 20
        ]
        assert len(section_titles) > 1

    def test_huge_title_is_truncated_in_toc_and_still_linked(self, engine):
        document = engine.layout("Topic", [block("x" * 50_000)], GENERATED_ON)

        entry = document.page(2).links()[0]
        assert entry.text.startswith("1. x")
        assert entry.text.endswith("...")
        assert len(entry.text) < 200
        assert entry.link_page == find_page(document, "SECTION 1") == 3

    def test_truncate_measures_only_the_visible_prefix(self):
        calls = []

        def counting_measure(text, font, size):
            calls.append(text)
            return len(text) * 5.0

        engine = DocumentLayoutEngine(subtitle="", measure=counting_measure)
        label = engine._truncate("y" * 50_000, 100, 11, "Helvetica")

        assert label == "y" * 17 + "..."
        assert len(calls) <= 30

    def test_truncate_keeps_text_that_fits(self):
        engine = DocumentLayoutEngine(subtitle="", measure=lambda text, font, size: len(text) * 5.0)
        assert engine._truncate("short", 100, 11, "Helvetica") == "short"

    def test_layout_does_not_mutate_blocks(self, engine):
        blocks = stage_blocks("Wind")
        snapshot = [b.model_dump() for b in blocks]
        engine.layout("Wind", blocks, GENERATED_ON)
        assert [b.model_dump() for b in blocks] == snapshot


def test_format_date_has_no_zero_padding():
    assert format_date(date(2026, 3, 5)) == "March 5, 2026"
