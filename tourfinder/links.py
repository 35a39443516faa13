import re
from typing import Any, Dict
from urllib.parse import quote

WHATSAPP_BASE = "https://wa.me/"


def inquiry_message(tour: Dict[str, Any]) -> str:
    price = tour.get("price")
    name = tour.get("name", "")
    label = f"{name} ({price})" if price else name
    return f"Halo, saya tertarik dengan tur: {label}. Bisakah saya dapatkan detail lebih lanjut?"


def whatsapp_url(tour: Dict[str, Any], phone: str) -> str:
    """
    Deep link that opens a WhatsApp chat prefilled with an inquiry.
    phone: international number, with or without a leading "+".
    """
    return WHATSAPP_BASE + phone.strip() + "?text=" + quote(inquiry_message(tour), safe="")


def price_digits(price: str) -> str:
    # "Rp 450.000" -> "450000"
    return re.sub(r"[^0-9]", "", price or "")


def product_schema(tour: Dict[str, Any]) -> Dict[str, Any]:
    """schema.org Product payload for a tour detail page."""
    return {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": tour.get("name", ""),
        "description": tour.get("description", ""),
        "image": tour.get("image", ""),
        "offers": {
            "@type": "Offer",
            "price": price_digits(tour.get("price", "")),
            "priceCurrency": "IDR",
            "availability": "https://schema.org/InStock",
        },
    }
