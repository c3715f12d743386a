from __future__ import annotations

import unittest

from batch_import import HalfPageRecord, ImportConfig, ImportSession
from batch_import.records import patch_field, patch_filename, patch_include
from contracts.fields import ExtractedFields, FieldId
from contracts.raster import Half

from pdf_fixtures import make_pdf, order_page


def _record(**overrides) -> HalfPageRecord:
    values = dict(
        record_id="doc.pdf-p1-T",
        source_document_name="doc.pdf",
        page_index=0,
        half=Half.TOP,
        pixel_width=10,
        pixel_height=10,
        preview_png=b"png",
        document_bytes=b"%PDF-1.4 fake",
        fields=ExtractedFields(connection_number="08561"),
        suggested_filename="LIG_08561_OS_X_p1_T.pdf",
    )
    values.update(overrides)
    return HalfPageRecord(**values)


class TestRecordReducers(unittest.TestCase):
    def test_field_edit_rederives_filename(self) -> None:
        r = patch_field(_record(), FieldId.CONNECTION_NUMBER, "99.123")
        self.assertEqual(r.fields.connection_number, "99123")
        self.assertEqual(r.fields.raw_connection_number, "99.123")
        self.assertEqual(r.suggested_filename, "LIG_99123_OS_X_p1_T.pdf")

        r = patch_field(r, FieldId.ORDER_NUMBER, "254651")
        self.assertEqual(r.suggested_filename, "LIG_99123_OS_254651_p1_T.pdf")

    def test_blank_value_clears_field(self) -> None:
        r = patch_field(_record(), FieldId.CONNECTION_NUMBER, "   ")
        self.assertIsNone(r.fields.connection_number)
        self.assertEqual(r.suggested_filename, "LIG_X_OS_X_p1_T.pdf")

    def test_manual_filename_survives_field_edits(self) -> None:
        r = patch_filename(_record(), "minha ordem?.PDF")
        self.assertEqual(r.suggested_filename, "minha_ordem_.pdf")
        self.assertTrue(r.filename_overridden)

        r = patch_field(r, FieldId.CONNECTION_NUMBER, "11111")
        self.assertEqual(r.fields.connection_number, "11111")
        self.assertEqual(r.suggested_filename, "minha_ordem_.pdf")
        self.assertTrue(r.filename_overridden)

    def test_manual_filename_rederived_when_configured(self) -> None:
        r = patch_filename(_record(), "manual.pdf")
        r = patch_field(r, FieldId.CONNECTION_NUMBER, "11111", rederive_manual=True)
        self.assertEqual(r.suggested_filename, "LIG_11111_OS_X_p1_T.pdf")
        self.assertFalse(r.filename_overridden)

    def test_prefix_is_kept_on_rederive(self) -> None:
        r = patch_field(_record(filename_prefix="corte"), FieldId.ORDER_NUMBER, "777")
        self.assertEqual(r.suggested_filename, "CORTE_LIG_08561_OS_777_p1_T.pdf")

    def test_extension_only_name_reverts_to_derived(self) -> None:
        manual = patch_filename(_record(), "manual")
        for name in (".pdf", "  .PDF ", "._.pdf"):
            r = patch_filename(manual, name)
            self.assertEqual(r.suggested_filename, "LIG_08561_OS_X_p1_T.pdf")
            self.assertFalse(r.filename_overridden)

    def test_include_toggle(self) -> None:
        r = _record()
        self.assertFalse(patch_include(r).include_in_batch)
        self.assertTrue(patch_include(patch_include(r)).include_in_batch)
        self.assertFalse(patch_include(r, False).include_in_batch)

    def test_reducers_do_not_mutate(self) -> None:
        r = _record()
        patch_field(r, FieldId.CONNECTION_NUMBER, "1234")
        patch_filename(r, "x")
        patch_include(r)
        self.assertEqual(r, _record())


class TestImportSession(unittest.TestCase):
    def test_edits_by_record_id(self) -> None:
        a = _record()
        b = _record(
            record_id="doc.pdf-p1-B",
            half=Half.BOTTOM,
            fields=ExtractedFields(),
            suggested_filename="LIG_X_OS_X_p1_B.pdf",
        )
        session = ImportSession(records=[a, b])

        session.update_field("doc.pdf-p1-B", "order_number", "254651")
        session.toggle_include("doc.pdf-p1-T")
        session.edit_filename("doc.pdf-p1-B", "final")

        self.assertEqual([r.record_id for r in session.records], ["doc.pdf-p1-T", "doc.pdf-p1-B"])
        self.assertFalse(session.get("doc.pdf-p1-T").include_in_batch)
        self.assertEqual(session.get("doc.pdf-p1-B").fields.order_number, "254651")
        self.assertEqual(session.get("doc.pdf-p1-B").suggested_filename, "final.pdf")
        self.assertEqual([r.record_id for r in session.included()], ["doc.pdf-p1-B"])

    def test_rederive_option_flows_from_config(self) -> None:
        session = ImportSession(
            config=ImportConfig(rederive_filename_after_manual_edit=True), records=[_record()]
        )
        session.edit_filename("doc.pdf-p1-T", "manual")
        session.update_field("doc.pdf-p1-T", FieldId.CONNECTION_NUMBER, "222")
        self.assertEqual(session.get("doc.pdf-p1-T").suggested_filename, "LIG_222_OS_X_p1_T.pdf")

    def test_same_named_files_edit_the_right_record(self) -> None:
        a = make_pdf([order_page("1001", "5001")])
        b = make_pdf([order_page("2001", "6001")])
        session = ImportSession.from_files([("a.pdf", a), ("a.pdf", b)])

        self.assertEqual(len({r.record_id for r in session.records}), 4)
        session.toggle_include(session.records[2].record_id)
        self.assertEqual([r.include_in_batch for r in session.records], [True, True, False, True])

        session.edit_filename(session.records[3].record_id, "segunda")
        self.assertEqual(session.records[3].suggested_filename, "segunda.pdf")
        self.assertEqual(session.records[1].suggested_filename, "LIG_X_OS_5001_p1_B.pdf")

    def test_edit_filename_extension_only(self) -> None:
        session = ImportSession(records=[_record()])
        session.edit_filename("doc.pdf-p1-T", ".pdf")
        self.assertEqual(session.get("doc.pdf-p1-T").suggested_filename, "LIG_08561_OS_X_p1_T.pdf")

    def test_unknown_record(self) -> None:
        with self.assertRaises(KeyError):
            ImportSession().toggle_include("missing")


if __name__ == "__main__":
    unittest.main()
