from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, call

from contracts.errors import InvalidDocument
from contracts.placeholders import Placeholders
from pdf_overlay.text import ELLIPSIS, split_long_word, text_width, wrap_text
from raster import page_count
from stamping import (
    InfoLine,
    LayoutMode,
    StampConfig,
    StampRequest,
    build_information_lines,
    layout_stamp,
    resolve_subject,
    stamp,
    stamp_request,
    stamp_stored_order,
)
from stamping.module import _draw
from storage import LocalBlobStore

from pdf_fixtures import make_pdf, page_texts

FONT = "Helvetica"


class TestWrapText(unittest.TestCase):
    def test_greedy_fill(self) -> None:
        width = text_width("aaa bbb", FONT, 10)
        self.assertEqual(wrap_text("aaa bbb ccc ddd", FONT, 10, width), ["aaa bbb", "ccc ddd"])
        self.assertEqual(wrap_text("aaa bbb", FONT, 10, width - 0.01), ["aaa", "bbb"])

    def test_lines_fit(self) -> None:
        text = "Rua das Palmeiras, 1234 - Bairro Industrial, próximo ao posto de saúde"
        for width in (40, 80, 150, 400):
            for line in wrap_text(text, FONT, 9, width):
                self.assertLessEqual(text_width(line, FONT, 9), width)

    def test_long_word_is_hyphenated(self) -> None:
        word = "X" * 40
        width = text_width("XXXXX", FONT, 10)
        pieces = split_long_word(word, FONT, 10, width)
        self.assertEqual("".join(p.rstrip("-") for p in pieces), word)
        self.assertTrue(all(p.endswith("-") for p in pieces[:-1]))
        self.assertFalse(pieces[-1].endswith("-"))
        for p in pieces:
            self.assertLessEqual(text_width(p, FONT, 10), width)

        lines = wrap_text(f"ab {word} cd", FONT, 10, width)
        self.assertEqual(lines[0], "ab")
        self.assertTrue(lines[1].endswith("-"))

    def test_blank_text_is_one_empty_line(self) -> None:
        self.assertEqual(wrap_text("", FONT, 10, 100), [""])
        self.assertEqual(wrap_text("a\n\nb", FONT, 10, 100), ["a", "", "b"])


class TestLayoutStamp(unittest.TestCase):
    def test_block_is_centered_and_sized_to_longest_line(self) -> None:
        lines = [InfoLine("Telefone", "(27) 99999-0000"), InfoLine("Ref", "Praça")]
        cfg = StampConfig()
        layout = layout_stamp(600, 800, lines, LayoutMode.CENTERED_BLOCK, cfg)

        longest = text_width("Telefone: (27) 99999-0000", cfg.font, cfg.font_size)
        self.assertAlmostEqual(layout.box_width, longest + 2 * cfg.padding)
        self.assertAlmostEqual(layout.box_x + layout.box_width / 2, 300)
        self.assertAlmostEqual(layout.box_y + layout.box_height / 2, 400)
        self.assertEqual(len(layout.items), 2)
        self.assertFalse(layout.truncated)

    def test_width_is_capped(self) -> None:
        cfg = StampConfig(max_width=200)
        layout = layout_stamp(600, 800, [InfoLine("Obs", "palavra " * 60)], LayoutMode.BORDERED_CARD, cfg)
        self.assertLessEqual(layout.box_width, 200)
        for item in layout.items:
            self.assertLessEqual(text_width(item.text, item.font, item.size), 200 - 2 * cfg.padding)

    def test_card_has_bold_title_first(self) -> None:
        cfg = StampConfig(title="DADOS")
        layout = layout_stamp(600, 800, [InfoLine("Telefone", "1")], LayoutMode.BORDERED_CARD, cfg)
        self.assertEqual(layout.items[0].text, "DADOS")
        self.assertEqual(layout.items[0].font, cfg.bold_font)
        self.assertEqual([i.text for i in layout.items[1:]], ["TELEFONE", "1"])

    def test_free_text_line_has_no_label(self) -> None:
        cfg = StampConfig(title="")
        line = InfoLine.coerce("Cliente ausente")
        self.assertEqual(line, InfoLine(None, "Cliente ausente"))

        card = layout_stamp(600, 800, [line, InfoLine("Ref", "Praça")], LayoutMode.BORDERED_CARD, cfg)
        self.assertEqual([i.text for i in card.items], ["Cliente ausente", "REF", "Praça"])
        block = layout_stamp(600, 800, [line], LayoutMode.CENTERED_BLOCK, cfg)
        self.assertEqual([i.text for i in block.items], ["Cliente ausente"])

    def test_overflow_truncates_last_section_with_ellipsis(self) -> None:
        cfg = StampConfig()
        lines = [InfoLine("Telefone", "123"), InfoLine("Observação", "muito texto " * 400)]
        layout = layout_stamp(400, 300, lines, LayoutMode.BORDERED_CARD, cfg)

        self.assertTrue(layout.truncated)
        self.assertTrue(layout.items[-1].text.endswith(ELLIPSIS))
        self.assertIn("123", [i.text for i in layout.items])
        self.assertLessEqual(layout.box_height, 300 - 2 * cfg.page_margin + 1e-6)
        self.assertGreaterEqual(layout.box_y, cfg.page_margin - 1e-6)

        again = layout_stamp(400, 300, lines, LayoutMode.BORDERED_CARD, cfg)
        self.assertEqual(layout, again)


class TestDraw(unittest.TestCase):
    def test_shadow_is_drawn_first_and_offset(self) -> None:
        cfg = StampConfig(shadow_offset=1.0, shadow_factor=0.5)
        layout = layout_stamp(600, 800, [InfoLine("A", "b")], LayoutMode.CENTERED_BLOCK, cfg)
        item = layout.items[0]

        c = MagicMock()
        _draw(c, layout, cfg)

        self.assertEqual(
            c.drawString.call_args_list,
            [call(item.x + 1.0, item.y - 1.0, item.text), call(item.x, item.y, item.text)],
        )
        fills = [x.args for x in c.setFillColorRGB.call_args_list]
        self.assertEqual(fills[-2], tuple(v * 0.5 for v in item.color))
        self.assertEqual(fills[-1], item.color)


class TestStamp(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = make_pdf([[(40, 500, "ORDEM ORIGINAL")], [(40, 500, "segunda")]])
        self.lines = [InfoLine("Telefone", "(27) 3333-4444"), InfoLine("Ponto de referência", "Próximo à igreja")]

    def test_idempotent_bytes(self) -> None:
        for mode in LayoutMode:
            a = stamp(self.doc, self.lines, mode)
            b = stamp(self.doc, list(self.lines), mode)
            self.assertEqual(a, b)
            req = StampRequest(self.doc, tuple(self.lines), mode)
            self.assertEqual(stamp_request(req), a)

    def test_first_page_carries_the_block(self) -> None:
        out = stamp(self.doc, self.lines, LayoutMode.BORDERED_CARD)
        self.assertEqual(page_count(out), 2)
        first, second = page_texts(out)
        self.assertIn("ORDEM ORIGINAL", first)
        self.assertIn("segunda", second)
        self.assertNotIn("3333", second)
        # Overlay streams are written uncompressed.
        self.assertIn(b"3333-4444", out)
        self.assertIn(b"TELEFONE", out)

    def test_tuple_lines_are_accepted(self) -> None:
        out = stamp(self.doc, [("Telefone", "123")], "centered_block")
        self.assertIn(b"Telefone: 123", out)

    def test_plain_string_lines_in_every_mode(self) -> None:
        for mode in LayoutMode:
            out = stamp(self.doc, ["Cliente ausente", ("Telefone", "123")], mode)
            self.assertIn(b"Cliente ausente", out)
            self.assertNotIn(b"None: ", out)

    def test_invalid_document(self) -> None:
        with self.assertRaises(InvalidDocument):
            stamp(b"not a pdf", self.lines)
        with self.assertRaises(InvalidDocument):
            stamp(b"", self.lines)

    def test_stored_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = LocalBlobStore(Path(tmp))
            store.upload("religacoes/u1/r1/ordem.pdf", self.doc)
            out = stamp_stored_order(
                store, "religacoes/u1/r1/ordem.pdf", self.lines, out_path="religacoes/u1/r1/impresso.pdf"
            )
            self.assertEqual(store.download("religacoes/u1/r1/impresso.pdf"), out)
            self.assertEqual(store.download("religacoes/u1/r1/ordem.pdf"), self.doc)


class TestSubjectResolution(unittest.TestCase):
    def test_candidate_keys_in_priority_order(self) -> None:
        row = {
            "nome": "fallback name",
            "solicitante_nome": "  Maria   Souza ",
            "telefone": "",
            "celular": "27999990000",
            "rua": "Rua A",
            "numero": "10",
            "bairro": "Centro",
            "ponto_referencia": None,
        }
        subject = resolve_subject(row)
        self.assertEqual(subject.name, "Maria Souza")
        self.assertEqual(subject.phone, "27999990000")
        self.assertIsNone(subject.reference_point)

        lines = {l.label: l.value for l in build_information_lines(subject)}
        self.assertEqual(lines["Telefone"], "(27) 99999-0000")
        self.assertEqual(lines["Endereço"], "Rua A, 10 - Centro")
        self.assertEqual(lines["Ponto de referência"], "—")

    def test_placeholders(self) -> None:
        lines = build_information_lines(
            resolve_subject({}), Placeholders({"*": "N/I", "observation": "sem observação"})
        )
        values = {l.label: l.value for l in lines}
        self.assertEqual(values["Telefone"], "N/I")
        self.assertEqual(values["Observação"], "sem observação")
        self.assertEqual(lines[-1].label, "Observação")


if __name__ == "__main__":
    unittest.main()
