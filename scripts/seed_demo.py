"""
Fills the configured Receipt Store with random demo receipts for the
revenue dashboard.

    python scripts/seed_demo.py [count]
"""

import random
import sys
import os
from datetime import datetime, timedelta

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from strukly.models import DraftItem, ReceiptDraft
from strukly.parsers import build_receipt
from strukly.store import build_receipt_store
from strukly.utils.config import get_settings

MERCHANTS = {
    "Makanan": ["Warung Bu Sri", "Nasi Goreng Pak Kumis", "Soto Lamongan Cak Har"],
    "Minuman": ["Kedai Kopi Senja", "Es Teh Indonesia", "Janji Jiwa"],
    "Jajanan": ["Lumpia Semarang", "Gorengan Mang Ujang"],
}

PRODUCTS = {
    "Makanan": [("Nasi Goreng", 15000), ("Mie Goreng", 13000), ("Soto Ayam", 18000), ("Gado-Gado", 12000)],
    "Minuman": [("Kopi", 8000), ("Teh", 4000), ("Es Jeruk", 6000), ("Air Mineral", 3000)],
    "Jajanan": [("Lumpia", 5000), ("Perkedel", 3000), ("Tahu Isi", 2000)],
}


def seed_data(n=30):
    settings = get_settings()
    store = build_receipt_store(settings.database_url)
    store.ensure_account(settings.user_id, display_name="Demo Merchant")

    print(f" Generating {n} random receipts for {settings.user_id}...")
    for _ in range(n):
        category = random.choice(list(MERCHANTS))
        merchant = random.choice(MERCHANTS[category])
        receipt_date = (datetime.now() - timedelta(days=random.randint(0, 90))).strftime("%Y-%m-%d")

        items = []
        for index in range(random.randint(1, 5)):
            name, price = random.choice(PRODUCTS[category])
            items.append(DraftItem(id=str(index), name=name, quantity=random.randint(1, 3), unit_price=price))

        draft = ReceiptDraft(merchant=merchant, items=items)
        receipt = store.create(build_receipt(draft, settings.user_id, receipt_date, category=category))
        print(f"  {receipt.date} {receipt.store_name}: {receipt.total_amount}")

    account = store.get_account(settings.user_id)
    print(f" Done. {account.total_receipts} receipts, total revenue {account.total_revenue}")


if __name__ == "__main__":
    seed_data(int(sys.argv[1]) if len(sys.argv) > 1 else 30)
