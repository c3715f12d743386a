from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
import zipfile
from pathlib import Path

from batch_import import cli as import_cli
from raster import page_count
from report import cli as report_cli
from stamping import cli as stamp_cli

from pdf_fixtures import make_pdf, order_page, page_texts


class TestImportCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.pdf = self.tmp / "ordens.pdf"
        self.pdf.write_bytes(make_pdf([order_page("08561", "254651")]))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_out_dir_and_summary(self) -> None:
        out = self.tmp / "out"
        summary = self.tmp / "summary.json"
        rc = import_cli.main([str(self.pdf), "--out-dir", str(out), "--subfolder", "lote 1", "--summary", str(summary)])

        self.assertEqual(rc, 0)
        names = sorted(p.name for p in (out / "lote_1").iterdir())
        self.assertEqual(names, ["LIG_08561_OS_X_p1_T.pdf", "LIG_X_OS_254651_p1_B.pdf"])
        data = json.loads(summary.read_text(encoding="utf-8"))
        self.assertEqual(len(data["records"]), 2)

    def test_out_zip(self) -> None:
        archive = self.tmp / "lote.zip"
        rc = import_cli.main([str(self.pdf), "--out-zip", str(archive), "--prefix", "CORTE"])

        self.assertEqual(rc, 0)
        with zipfile.ZipFile(archive) as zf:
            members = zf.namelist()
            self.assertEqual(len(members), 2)
            self.assertTrue(all(m.startswith("CORTE_") for m in members))
            self.assertTrue(zf.read(members[0]).startswith(b"%PDF-"))

    def test_bad_input_is_reported(self) -> None:
        bad = self.tmp / "quebrado.pdf"
        bad.write_bytes(b"garbage")
        rc = import_cli.main([str(self.pdf), str(bad), "--out-dir", str(self.tmp / "out")])
        self.assertEqual(rc, 1)
        self.assertEqual(len(list((self.tmp / "out").iterdir())), 2)

    def test_cut_ratio_out_of_range(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                import_cli.main([str(self.pdf), "--out-dir", str(self.tmp), "--cut-ratio", "0.9"])
        self.assertEqual(ctx.exception.code, 2)


class TestStampCli(unittest.TestCase):
    def test_pdf_with_lines_and_row(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "ordem.pdf"
            src.write_bytes(make_pdf([[(40, 500, "ORDEM")]]))
            row = Path(tmp) / "row.json"
            row.write_text(json.dumps({"nome": "Maria", "telefone": "2733334444"}), encoding="utf-8")
            out = Path(tmp) / "impresso.pdf"

            rc = stamp_cli.main(
                ["--pdf", str(src), "--row", str(row), "--line", "Protocolo=123", "--line", "Cliente ausente", "--placeholder", "N/I", "--out", str(out)]
            )

            self.assertEqual(rc, 0)
            data = out.read_bytes()
            self.assertEqual(page_count(data), 1)
            self.assertIn(b"3333-4444", data)
            self.assertIn(b"PROTOCOLO", data)
            self.assertIn(b"Cliente ausente", data)
            self.assertIn(b"N/I", data)

    def test_nothing_to_stamp(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "ordem.pdf"
            src.write_bytes(make_pdf([[]]))
            with contextlib.redirect_stderr(io.StringIO()):
                rc = stamp_cli.main(["--pdf", str(src), "--out", str(Path(tmp) / "x.pdf")])
            self.assertEqual(rc, 2)

    def test_stored_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "store"
            stored = root / "cortes" / "u1" / "9" / "ordem.pdf"
            stored.parent.mkdir(parents=True)
            stored.write_bytes(make_pdf([[]]))
            out = Path(tmp) / "impresso.pdf"

            rc = stamp_cli.main(
                [
                    "--storage-path", "cortes/u1/9/ordem.pdf",
                    "--store-root", str(root),
                    "--upload-to", "cortes/u1/9/impresso.pdf",
                    "--line", "Obs=ok",
                    "--mode", "centered_block",
                    "--out", str(out),
                ]
            )

            self.assertEqual(rc, 0)
            self.assertEqual((root / "cortes" / "u1" / "9" / "impresso.pdf").read_bytes(), out.read_bytes())


class TestReportCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.template = self.tmp / "timbrado.pdf"
        self.template.write_bytes(make_pdf([[]], pagesize=(595, 842)))
        self.rows = self.tmp / "rows.json"
        rows = [{"os": str(i), "matricula": str(100 + i), "status": "cortada"} for i in range(5)]
        self.rows.write_text(json.dumps(rows), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_suggested_name_into_directory(self) -> None:
        rc = report_cli.main(
            [
                "--rows", str(self.rows),
                "--template", str(self.template),
                "--fields", "os,matricula",
                "--start", "2024-03-01",
                "--end", "2024-03-31",
                "--group-by-status",
                "--out", str(self.tmp),
            ]
        )

        self.assertEqual(rc, 0)
        out = self.tmp / "relatorio-cortes-2024-03-01-a-2024-03-31.pdf"
        text = page_texts(out.read_bytes())[0]
        self.assertIn("STATUS: CORTADA", text)
        self.assertIn("DE 2024-03-01 ATÉ 2024-03-31", text)
        self.assertLess(text.index("OS"), text.index("MATRÍCULA"))

    def test_validation_errors(self) -> None:
        base = ["--rows", str(self.rows), "--template", str(self.template), "--out", str(self.tmp / "r.pdf")]
        with contextlib.redirect_stderr(io.StringIO()):
            self.assertEqual(report_cli.main(base + ["--fields", "os,nope"]), 2)
            self.assertEqual(report_cli.main(base + ["--timezone", "Mars/Olympus"]), 2)
            self.assertEqual(report_cli.main(["--rows", str(self.rows), "--template", str(self.tmp / "none.pdf")]), 1)


if __name__ == "__main__":
    unittest.main()
