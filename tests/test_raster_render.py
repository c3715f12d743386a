from __future__ import annotations

import unittest

from contracts.errors import InvalidDocument, PageIndexOutOfRange
from raster import RasterConfig, open_document, page_count, render_page

from pdf_fixtures import PAGE_H, PAGE_W, make_pdf


class TestRenderPage(unittest.TestCase):
    def test_pixel_size_follows_scale(self) -> None:
        doc = make_pdf([[(40, 500, "hello")]])
        page = render_page(doc, 0, 2.0)
        self.assertEqual((page.pixel_width, page.pixel_height), (PAGE_W * 2, PAGE_H * 2))
        self.assertEqual(page.image.size, (PAGE_W * 2, PAGE_H * 2))
        self.assertEqual(page.image.mode, "RGB")
        self.assertEqual(page.page_index, 0)
        self.assertEqual(page.rotation, 0)

    def test_text_runs_are_in_top_down_pixel_space(self) -> None:
        doc = make_pdf([[(40, 500, "near the top"), (40, 60, "near the bottom")]])
        page = render_page(doc, 0, config=RasterConfig(scale=2.0))
        by_text = {r.text: r for r in page.text_runs}

        top = by_text["near the top"]
        bottom = by_text["near the bottom"]
        # Baseline at y=500pt from the bottom is ~100pt from the top -> ~200px.
        self.assertAlmostEqual(top.baseline_y, (PAGE_H - 500) * 2, delta=12)
        self.assertAlmostEqual(bottom.baseline_y, (PAGE_H - 60) * 2, delta=12)
        self.assertLess(top.baseline_y, bottom.baseline_y)
        self.assertAlmostEqual(top.baseline_x, 80, delta=4)

    def test_second_page_and_count(self) -> None:
        doc = make_pdf([[(40, 500, "one")], [(40, 500, "two")]])
        self.assertEqual(page_count(doc), 2)
        page = render_page(doc, 1, 1.0)
        self.assertEqual(page.page_index, 1)
        self.assertEqual([r.text for r in page.text_runs], ["two"])

    def test_rotation_is_reported(self) -> None:
        doc = make_pdf([[(40, 500, "sideways")]], rotate=90)
        page = render_page(doc, 0, 1.0)
        self.assertEqual(page.rotation, 90)

    def test_invalid_bytes(self) -> None:
        with self.assertRaises(InvalidDocument):
            render_page(b"definitely not a pdf", 0, 1.0)
        with self.assertRaises(InvalidDocument):
            render_page(b"", 0, 1.0)
        with self.assertRaises(InvalidDocument):
            page_count(b"%PDF-1.4 truncated")

    def test_page_index_out_of_range(self) -> None:
        doc = make_pdf([[(40, 500, "only page")]])
        with self.assertRaises(PageIndexOutOfRange):
            render_page(doc, 1, 1.0)
        with self.assertRaises(PageIndexOutOfRange):
            render_page(doc, -1, 1.0)

    def test_open_document_renders_each_page_from_one_handle(self) -> None:
        doc = make_pdf([[(40, 500, "one")], [(40, 500, "two")], [(40, 500, "three")]])
        with open_document(doc) as handle:
            self.assertEqual(handle.page_count, 3)
            texts = [[r.text for r in handle.render_page(i, scale=1.0).text_runs] for i in (2, 0, 1)]
            with self.assertRaises(PageIndexOutOfRange):
                handle.render_page(3, scale=1.0)
        self.assertEqual(texts, [["three"], ["one"], ["two"]])

        with self.assertRaises(ValueError):
            handle.render_page(0, scale=1.0)
        handle.close()

    def test_scale_must_be_positive(self) -> None:
        doc = make_pdf([[(40, 500, "x")]])
        with self.assertRaises(ValueError):
            render_page(doc, 0, 0)
        with self.assertRaises(ValueError):
            RasterConfig(scale=-1)


if __name__ == "__main__":
    unittest.main()
