# bulk_generate_pdfs.py
import argparse
import json
import logging
import os
from pathlib import Path

from config import Config
from models import Invoice
from pdf_service import generate_and_store_pdf, invoice_filename
from template_catalog import get_template


def load_invoices(paths, default_currency: str) -> list[Invoice]:
    """Each file holds one invoice object or a list of them."""
    invoices = []
    for p in paths:
        with open(p, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        docs = data if isinstance(data, list) else [data]
        for doc in docs:
            invoices.append(Invoice.from_dict(doc, default_currency=default_currency))
    return invoices


def main(argv=None):
    parser = argparse.ArgumentParser(description="Bulk generate invoice PDFs from JSON files.")
    parser.add_argument("files", nargs="+", help="JSON files with one invoice or a list of invoices.")
    parser.add_argument("--template", type=str, default=Config.DEFAULT_TEMPLATE_ID, help="Template id, e.g. classic-forest-green.")
    parser.add_argument("--logo", type=str, default="", help="Logo image (PNG/JPEG) drawn in the header.")
    parser.add_argument("--out", type=str, default=Config.EXPORTS_DIR, help="Folder the PDFs are written to.")
    parser.add_argument("--all", action="store_true", help="Regenerate PDFs even if one already exists.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=Config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    # Ensure exports dir exists
    Path(args.out).mkdir(parents=True, exist_ok=True)

    template = get_template(args.template, Config.DEFAULT_TEMPLATE_ID)
    if template.id != (args.template or "").strip().lower():
        print(f"Unknown template '{args.template}', using {template.id}")

    logo = None
    if args.logo:
        try:
            logo = Path(args.logo).read_bytes()
        except OSError as e:
            print(f"Logo not readable ({e}), continuing without it")

    invoices = load_invoices(args.files, Config.DEFAULT_CURRENCY)
    if not invoices:
        print("No invoices found in the given files.")
        return 0

    total = len(invoices)
    generated = 0
    skipped = 0
    failed = 0

    for i, inv in enumerate(invoices, start=1):
        try:
            existing = os.path.join(args.out, invoice_filename(inv))
            if os.path.exists(existing) and not args.all:
                skipped += 1
                print(f"[{i}/{total}] SKIP  {inv.number} (already has PDF)")
                continue

            path = generate_and_store_pdf(inv, template, exports_dir=args.out, logo=logo)
            generated += 1
            print(f"[{i}/{total}] DONE  {inv.number} -> {path}")

        except Exception as e:
            failed += 1
            print(f"[{i}/{total}] FAIL  {inv.number}  ({e})")

    print("\nBulk PDF generation complete.")
    print(f"Generated: {generated}")
    print(f"Skipped:   {skipped}")
    print(f"Failed:    {failed}")
    print(f"Exports:   {args.out}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
