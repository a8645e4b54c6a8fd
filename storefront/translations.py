from __future__ import annotations

from typing import Dict

DEFAULT_LANGUAGE = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        # Categories
        "categories.title": "Shop by Category",
        "categories.subtitle": "Find the right medication quickly with our organized categories and expert guidance.",
        "categories.items": "items",
        # Products
        "products.title": "Featured Medicines",
        "products.subtitle": "Popular and trusted medications with excellent customer reviews and fast delivery.",
        "products.outOfStock": "Out of Stock",
        "products.lowStock": "Low Stock",
        "products.inStock": "In Stock",
        "products.reviews": "reviews",
        "products.units": "units",
        "products.addToCart": "Add to Cart",
        "products.viewAll": "View All Medicines",
        # Reviews
        "reviews.title": "What Our Customers Say",
        "reviews.subtitle": "Real reviews from real customers who trust us with their healthcare needs.",
        # Cart
        "cart.title": "Shopping Cart",
        "cart.empty": "Your cart is empty",
        "cart.continue": "Continue Shopping",
        "cart.total": "Total:",
        "cart.checkout": "Proceed to Checkout",
        "cart.clear": "Clear Cart",
        # Common
        "search": "Search",
        "loading": "Loading...",
        "error": "Error",
        "success": "Success",
        "price": "Price",
        "quantity": "Quantity",
        "rating": "Rating",
    },
    "hi": {
        "categories.title": "श्रेणी के अनुसार खरीदारी करें",
        "categories.subtitle": "हमारी संगठित श्रेणियों और विशेषज्ञ मार्गदर्शन के साथ सही दवा जल्दी खोजें।",
        "categories.items": "वस्तुएं",
        "products.title": "विशेष दवाइयां",
        "products.subtitle": "उत्कृष्ट ग्राहक समीक्षाओं और तेज़ डिलीवरी के साथ लोकप्रिय और विश्वसनीय दवाएं।",
        "products.outOfStock": "स्टॉक में नहीं",
        "products.lowStock": "कम स्टॉक",
        "products.inStock": "स्टॉक में उपलब्ध",
        "products.reviews": "समीक्षाएं",
        "products.units": "यूनिट",
        "products.addToCart": "कार्ट में जोड़ें",
        "products.viewAll": "सभी दवाइयां देखें",
        "reviews.title": "हमारे ग्राहक क्या कहते हैं",
        "reviews.subtitle": "वास्तविक ग्राहकों की वास्तविक समीक्षाएं जो अपनी स्वास्थ्य आवश्यकताओं के लिए हम पर भरोसा करते हैं।",
        "cart.title": "शॉपिंग कार्ट",
        "cart.empty": "आपका कार्ट खाली है",
        "cart.continue": "खरीदारी जारी रखें",
        "cart.total": "कुल:",
        "cart.checkout": "चेकआउट पर जाएं",
        "cart.clear": "कार्ट साफ़ करें",
        "search": "खोजें",
        "loading": "लोड हो रहा है...",
        "error": "त्रुटि",
        "success": "सफलता",
        "price": "कीमत",
        "quantity": "मात्रा",
        "rating": "रेटिंग",
    },
}


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Look up a UI string; unknown languages fall back to English, unknown keys to the key."""

    table = TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])
    return table.get(key, key)
