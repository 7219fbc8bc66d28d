"""
Indonesian and English string tables for the user-facing surfaces.
"""

from typing import Dict

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "id": {
        # Navigation & common
        "app_title": "Strukly",
        "tagline": "Dokumentasi struk otomatis dengan AI untuk UMKM Indonesia.",
        "tab_detect": "Deteksi Struk",
        "tab_revenue": "Laporan Pendapatan",
        "tab_receipts": "Riwayat Struk",
        "theme_dark": "Mode Gelap",
        "language": "Bahasa",

        # Detect page
        "ambil_foto_struk": "1. Ambil Foto Struk",
        "data_terdeteksi": "2. Data Terdeteksi",
        "klik_drag": "Klik atau drag foto struk di sini",
        "png_jpg": "PNG, JPG hingga 5MB",
        "mendeteksi_struk": "Mendeteksi struk dengan AI...",
        "merchant": "Merchant",
        "nama_item": "Nama Item",
        "qty": "Qty",
        "harga": "Harga",
        "kategori": "Kategori",
        "tanggal": "Tanggal",
        "tambah_item": "Tambah Item",
        "hapus": "Hapus",
        "total": "Total:",
        "simpan_database": "Simpan ke Database",
        "struk_berhasil": "Struk berhasil disimpan!",
        "struk_kosong": "Tambahkan minimal satu item sebelum menyimpan.",
        "deteksi_gagal": "Gagal membaca struk. Silakan coba lagi atau isi item secara manual.",
        "simpan_gagal": "Gagal menyimpan struk. Silakan coba lagi.",

        # Revenue page
        "laporan_pendapatan_title": "Laporan Pendapatan",
        "hari_ini": "Hari Ini",
        "minggu": "Minggu",
        "bulan": "Bulan",
        "tahun": "Tahun",
        "total_pendapatan": "Total Pendapatan",
        "jumlah_transaksi": "Jumlah Transaksi",
        "rata_rata": "Rata-rata per Transaksi",
        "tren_pendapatan": "Tren Pendapatan",
        "pendapatan_bulanan": "Pendapatan Bulanan",
        "laporan_harian": "Laporan Harian",
        "belum_ada_data": "Belum ada struk pada periode ini.",
        "laporan_gagal": "Gagal memuat laporan. Silakan coba lagi.",
        "coba_lagi": "Coba Lagi",

        # Receipt history
        "cari_struk": "Cari struk atau item...",
        "hapus_gagal": "Gagal menghapus struk.",
        "struk_dihapus": "Struk dihapus.",

        # Chat
        "chat_title": "Strukly AI",
        "chat_placeholder": "Tanya sesuatu tentang Strukly...",
        "chat_fallback": "Maaf, saya sedang pusing. Coba lagi nanti ya.",
        "chat_system_error": "Terjadi kesalahan sistem.",
    },
    "en": {
        "app_title": "Strukly",
        "tagline": "AI-powered receipt documentation for Indonesian small businesses.",
        "tab_detect": "Detect Receipt",
        "tab_revenue": "Revenue Report",
        "tab_receipts": "Receipt History",
        "theme_dark": "Dark Mode",
        "language": "Language",

        "ambil_foto_struk": "1. Take Receipt Photo",
        "data_terdeteksi": "2. Detected Data",
        "klik_drag": "Click or drag a receipt photo here",
        "png_jpg": "PNG, JPG up to 5MB",
        "mendeteksi_struk": "Detecting receipt with AI...",
        "merchant": "Merchant",
        "nama_item": "Item Name",
        "qty": "Qty",
        "harga": "Price",
        "kategori": "Category",
        "tanggal": "Date",
        "tambah_item": "Add Item",
        "hapus": "Delete",
        "total": "Total:",
        "simpan_database": "Save to Database",
        "struk_berhasil": "Receipt saved successfully!",
        "struk_kosong": "Add at least one item before saving.",
        "deteksi_gagal": "Could not read the receipt. Please retry or enter the items manually.",
        "simpan_gagal": "Could not save the receipt. Please try again.",

        "laporan_pendapatan_title": "Revenue Report",
        "hari_ini": "Today",
        "minggu": "Week",
        "bulan": "Month",
        "tahun": "Year",
        "total_pendapatan": "Total Revenue",
        "jumlah_transaksi": "Transactions",
        "rata_rata": "Average per Transaction",
        "tren_pendapatan": "Revenue Trend",
        "pendapatan_bulanan": "Monthly Revenue",
        "laporan_harian": "Daily Report",
        "belum_ada_data": "No receipts in this period yet.",
        "laporan_gagal": "Could not load the report. Please try again.",
        "coba_lagi": "Retry",

        "cari_struk": "Search receipts or items...",
        "hapus_gagal": "Could not delete the receipt.",
        "struk_dihapus": "Receipt deleted.",

        "chat_title": "Strukly AI",
        "chat_placeholder": "Ask something about Strukly...",
        "chat_fallback": "Sorry, I'm having trouble right now. Please try again later.",
        "chat_system_error": "A system error occurred.",
    },
}

DEFAULT_LOCALE = "id"


def translate(locale: str, key: str) -> str:
    """
    Looks up a UI string, falling back to Indonesian and then to the key itself.
    """
    table = TRANSLATIONS.get(locale, TRANSLATIONS[DEFAULT_LOCALE])
    if key in table:
        return table[key]
    return TRANSLATIONS[DEFAULT_LOCALE].get(key, key)
