import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from strukly.analytics.periods import PERIODS
from strukly.analytics.revenue_service import RevenueService
from strukly.exceptions import AccountNotFoundError
from strukly.store import build_receipt_store
from strukly.utils.config import get_settings
from strukly.utils.currency import format_rupiah


def check_stats():
    settings = get_settings()
    store = build_receipt_store(settings.database_url)

    try:
        account = store.get_account(settings.user_id)
    except AccountNotFoundError:
        print(f"No account for {settings.user_id}. Run scripts/seed_demo.py first.")
        return

    print(f"Account: {account.uid} | receipts: {account.total_receipts} | revenue: {format_rupiah(account.total_revenue)}")

    # Running totals versus a full recomputation over stored receipts
    service = RevenueService(store)
    lifetime = service.stats_for_range(settings.user_id)
    drift = account.total_revenue - lifetime.total_revenue
    print(f"Recomputed lifetime revenue: {format_rupiah(lifetime.total_revenue)} (drift {drift})")

    for period in PERIODS:
        stats = service.stats_for_period(settings.user_id, period)
        print(f" - {period:<5} {stats.total_receipts:>4} receipts  {format_rupiah(stats.total_revenue):>16}  avg {format_rupiah(stats.average_transaction)}")


if __name__ == "__main__":
    check_stats()
