import json

import bulk_generate_pdfs


def _write(tmp_path, docs):
    path = tmp_path / "invoices.json"
    path.write_text(json.dumps(docs), encoding="utf-8")
    return str(path)


def test_generates_one_pdf_per_invoice(tmp_path, capsys):
    src = _write(tmp_path, [
        {"number": "INV-1", "customer": {"name": "Globex"}, "items": [{"description": "Work", "quantity": 1, "rate": 10}]},
        {"number": "INV-2", "customer": {"name": "Initech"}, "items": [{"description": "Work", "quantity": 2, "rate": 10}]},
    ])
    out = tmp_path / "out"

    rc = bulk_generate_pdfs.main([src, "--out", str(out), "--template", "minimal-navy-blue"])

    assert rc == 0
    assert sorted(p.name for p in out.iterdir()) == ["Invoice-INV-1.pdf", "Invoice-INV-2.pdf"]
    printed = capsys.readouterr().out
    assert "[1/2] DONE  INV-1" in printed
    assert "Failed:    0" in printed


def test_existing_pdfs_are_skipped_unless_all(tmp_path, capsys):
    src = _write(tmp_path, {"number": "INV-1", "items": []})
    out = tmp_path / "out"

    bulk_generate_pdfs.main([src, "--out", str(out)])
    capsys.readouterr()

    bulk_generate_pdfs.main([src, "--out", str(out)])
    assert "SKIP  INV-1" in capsys.readouterr().out

    bulk_generate_pdfs.main([src, "--out", str(out), "--all"])
    assert "DONE  INV-1" in capsys.readouterr().out


def test_unreadable_logo_is_not_fatal(tmp_path, capsys):
    src = _write(tmp_path, {"number": "INV-3"})
    out = tmp_path / "out"

    rc = bulk_generate_pdfs.main([src, "--out", str(out), "--logo", str(tmp_path / "missing.png")])

    assert rc == 0
    assert (out / "Invoice-INV-3.pdf").exists()
    assert "continuing without it" in capsys.readouterr().out
