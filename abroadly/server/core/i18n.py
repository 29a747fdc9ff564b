"""
Localized response messages.

The client selects a language through ``Accept-Language``: values starting
with ``en`` select English, anything else falls back to Indonesian.
"""

from typing import Dict

from fastapi import Request

DEFAULT_LANGUAGE = "id"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        # account
        "userNotFound": "User not found",
        "internalServerError": "Internal server error",
        "profileUpdated": "Profile updated successfully",
        "fullNameTooShort": "Full name must be at least 2 characters",
        "logoutSuccessful": "Logout successful",
        # ai
        "noFileUploaded": "No file uploaded",
        "invalidFileType": "Invalid file type. Please upload a PDF file.",
        "fileTooLarge": "File too large. Maximum size is 10MB.",
        "fileProcessingError": "Error processing the uploaded file",
        "profileAutofillSuccess": "Profile data extracted successfully",
        "noUniversitiesFound": "No universities found in database",
        "aiMatchingFailed": "AI matching failed",
        "universityMatchError": "Failed to generate university matches",
        "invalidProfileData": "Invalid profile data provided",
        "databaseError": "Database operation failed",
    },
    "id": {
        "userNotFound": "Pengguna tidak ditemukan",
        "internalServerError": "Terjadi kesalahan pada server",
        "profileUpdated": "Profil berhasil diperbarui",
        "fullNameTooShort": "Nama lengkap minimal 2 karakter",
        "logoutSuccessful": "Berhasil keluar",
        "noFileUploaded": "Tidak ada file yang diunggah",
        "invalidFileType": "Tipe file tidak valid. Silakan unggah file PDF.",
        "fileTooLarge": "File terlalu besar. Ukuran maksimum adalah 10MB.",
        "fileProcessingError": "Error memproses file yang diunggah",
        "profileAutofillSuccess": "Data profil berhasil diekstrak",
        "noUniversitiesFound": "Tidak ada universitas yang ditemukan di database",
        "aiMatchingFailed": "Pencocokan AI gagal",
        "universityMatchError": "Gagal menghasilkan kecocokan universitas",
        "invalidProfileData": "Data profil yang diberikan tidak valid",
        "databaseError": "Operasi database gagal",
    },
}


def get_language(request: Request) -> str:
    """Resolve the response language from the ``Accept-Language`` header."""
    accept_language = request.headers.get("accept-language", "")
    return "en" if accept_language.startswith("en") else DEFAULT_LANGUAGE


def translate(key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """
    Look up a localized message.

    Args:
        key: Message key
        lang: ``en`` or ``id``

    Returns:
        The message in the requested language, the English one when the key
        is only known in English, or the key itself when it is unknown
    """
    return MESSAGES.get(lang, {}).get(key) or MESSAGES["en"].get(key) or key
