from __future__ import annotations

import unittest
from datetime import date, datetime

from batch_import.filenames import (
    MAX_FILENAME_LENGTH,
    build_suggested_filename,
    dedupe_names,
    default_archive_name,
    ensure_pdf_extension,
    sanitize_filename,
    split_ext,
    with_timestamp,
)
from contracts.fields import ExtractedFields
from contracts.raster import Half


class TestSanitizeFilename(unittest.TestCase):
    def test_illegal_characters_and_whitespace(self) -> None:
        self.assertEqual(sanitize_filename('a/b\\c:d*e?f"g<h>i|j.pdf'), "a_b_c_d_e_f_g_h_i_j.pdf")
        self.assertEqual(sanitize_filename("  ordem   de  corte .pdf "), "ordem_de_corte_.pdf")
        self.assertEqual(sanitize_filename("nome..."), "nome")

    def test_reserved_names(self) -> None:
        self.assertEqual(sanitize_filename("CON"), "_CON")
        self.assertEqual(sanitize_filename("lpt1.pdf"), "_lpt1.pdf")
        self.assertEqual(sanitize_filename("console.pdf"), "console.pdf")

    def test_empty_and_length(self) -> None:
        self.assertEqual(sanitize_filename(""), "arquivo")
        self.assertEqual(sanitize_filename("..."), "arquivo")
        long = sanitize_filename("x" * 500 + ".pdf")
        self.assertEqual(len(long), MAX_FILENAME_LENGTH)
        self.assertTrue(long.endswith(".pdf"))

    def test_extension_helpers(self) -> None:
        self.assertEqual(split_ext("a.b.pdf"), ("a.b", ".pdf"))
        self.assertEqual(split_ext(".hidden"), (".hidden", ""))
        self.assertEqual(ensure_pdf_extension("doc.PDF"), "doc.pdf")
        self.assertEqual(ensure_pdf_extension("doc"), "doc.pdf")


class TestSuggestedFilename(unittest.TestCase):
    def test_placeholders_and_page_number(self) -> None:
        fields = ExtractedFields(connection_number="08561")
        self.assertEqual(build_suggested_filename(fields, 0, Half.TOP), "LIG_08561_OS_X_p1_T.pdf")
        self.assertEqual(build_suggested_filename(ExtractedFields(), 4, Half.BOTTOM), "LIG_X_OS_X_p5_B.pdf")

    def test_prefix(self) -> None:
        fields = ExtractedFields(connection_number="1", order_number="2")
        self.assertEqual(build_suggested_filename(fields, 0, Half.TOP, " corte "), "CORTE_LIG_1_OS_2_p1_T.pdf")
        self.assertEqual(build_suggested_filename(fields, 0, Half.TOP, "   "), "LIG_1_OS_2_p1_T.pdf")


class TestDedupe(unittest.TestCase):
    def test_case_insensitive_suffixes(self) -> None:
        self.assertEqual(
            dedupe_names(["a.pdf", "A.pdf", "a.pdf", "b.pdf", "a_1.pdf"]),
            ["a.pdf", "A_1.pdf", "a_2.pdf", "b.pdf", "a_1_1.pdf"],
        )

    def test_archive_and_timestamp_names(self) -> None:
        self.assertEqual(default_archive_name(date(2024, 3, 9)), "ordens_corte_2024-03-09.zip")
        self.assertEqual(
            with_timestamp("lote.zip", datetime(2024, 3, 9, 14, 5, 7)), "lote_20240309-140507.zip"
        )


if __name__ == "__main__":
    unittest.main()
