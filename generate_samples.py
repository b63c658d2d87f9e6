"""Render one sample .docx per document type into ./samples for visual review."""
import os
import sys
from datetime import date

from chsi.services.document_generator import generate
from chsi.services.document_model import DocumentType

OUTPUT_DIR = "samples"

SAMPLE_DATA = {
    "city": "Алматы",
    "outgoing_number": "01-15/245",
    "executor_name": "Ахметов Б.К.",
    "executor_address": "г. Алматы, пр. Абая, 10, офис 5",
    "executor_phone": "+7 701 000 00 00",
    "district": "г. Алматы",
    "case_number": "02-2024/1187",
    "exec_doc_number": "2-3456/2024",
    "exec_doc_date": "12.03.2024",
    "court_name": "Бостандыкский районный суд г. Алматы",
    "creditor_name": "ТОО «Кредит Плюс»",
    "creditor_iin": "180540012345",
    "creditor_address": "г. Алматы, ул. Сатпаева, 30",
    "debtor_name": "Иванов Иван Иванович",
    "debtor_iin": "850101300123",
    "debtor_address": "г. Алматы, мкр. Самал-2, д. 5, кв. 12",
    "amount": "1250000",
    "bank_name": "АО «Народный банк Казахстана»",
    "bank_address": "г. Алматы, пр. Аль-Фараби, 40",
    "inventory_address": "г. Алматы, мкр. Самал-2, д. 5, кв. 12",
    "witness1_name": "Петров П.П.",
    "witness1_address": "г. Алматы, ул. Жандосова, 1",
    "witness2_name": "Сидорова С.С.",
    "witness2_address": "г. Алматы, ул. Тимирязева, 2",
    "property_items": "1. Телевизор Samsung, 1, б/у\n2. Холодильник LG, 1, рабочий",
    "storage_responsible": "Иванов И.И.",
}

def main(empty: bool = False) -> None:
    os.makedirs(OUTPUT_DIR, exist_ok=True)
    today = date.today()
    for document_type in DocumentType:
        data = {} if empty else SAMPLE_DATA
        blob = generate(document_type, data, today=today, title=document_type.title)
        suffix = "_empty" if empty else ""
        path = os.path.join(OUTPUT_DIR, f"{document_type.value}{suffix}.docx")
        with open(path, "wb") as fh:
            fh.write(blob)
        print(f"Document saved to: {path}")


if __name__ == "__main__":
    main(empty="--empty" in sys.argv)
