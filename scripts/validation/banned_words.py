"""
Banned Vocabulary for Merch Listings

Categorised words and phrases that get a listing rejected: product
descriptors, health claims, promotional language, quality claims, sales
pressure, trademarks, service promises, material claims and inappropriate
content. Matching is case-insensitive and whole-word.

Usage:
    from validation.banned_words import find_banned_words, remove_banned_words

    find_banned_words("Best Seller Nurse Gift")   # ['gift', 'best seller']
    remove_banned_words("Best Seller Nurse Gift")  # 'Nurse'
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, List, Optional, Pattern, Tuple


MERCH_BANNED_WORDS = MappingProxyType({
    "apparel": (
        "design", "designs", "designer", "designed",
        "graphic", "graphics", "artwork", "illustration",
        "print", "printed", "printing", "drawing",
        "t-shirt", "tshirt", "shirt", "shirts",
        "hoodie", "hoodies", "sweatshirt", "sweatshirts",
        "tank top", "tank tops", "tanktop",
        "gift", "gifts", "present", "gifting",
        "premium", "perfect", "tee", "tees",
        "apparel", "clothing", "wear", "garment",
        "merchandise", "merch", "product", "item",
        "outfit", "attire", "costume", "jersey",
        "pullover", "crewneck", "crew neck", "raglan",
        "v-neck", "vneck", "long sleeve", "short sleeve",
    ),
    "health_medical": (
        "cure", "cures", "curing", "treat", "treatment",
        "fda", "approved", "medical", "medicine",
        "cancer", "diabetes", "disease", "disorder",
        "anti-bacterial", "antibacterial", "therapeutic",
        "detoxify", "detox", "cleanse", "cleansing",
        "healing", "heals", "heal", "healer",
        "doctor", "prescription", "diagnose", "diagnosis",
        "symptom", "symptoms", "remedy", "remedies",
        "anxiety", "depression", "depressed", "anxious",
        "aids", "hiv", "covid", "covid-19", "coronavirus",
        "pandemic", "virus", "viral", "infection",
        "health claim", "health benefits", "wellness",
        "arthritis", "alzheimers", "alzheimer",
        "autism", "adhd", "add", "bipolar",
        "ptsd", "ocd", "schizophrenia", "dementia",
        "stroke", "heart attack", "blood pressure",
        "cholesterol", "immune system", "immunity",
        "anti-inflammatory", "antiinflammatory",
        "antiviral", "anti-viral", "antimicrobial",
        "antibiotics", "antibiotic", "vaccination",
        "vaccine", "clinical", "clinically",
        "pharmaceutical", "drug", "drugs", "medication",
    ),
    "promotional": (
        "best seller", "bestseller", "best-seller",
        "top seller", "top-seller", "topseller",
        "guaranteed", "guarantee", "guarantees",
        "money-back", "money back", "refund", "refunds",
        "limited time", "limited-time", "hurry",
        "free shipping", "free delivery", "fast shipping",
        "sale", "sales", "on sale", "for sale",
        "discount", "discounted", "discounts",
        "off", "% off", "percent off",
        "offer", "offers", "special offer", "exclusive offer",
        "deal", "deals", "hot deal", "best deal",
        "clearance", "closeout", "liquidation",
        "promo", "promotion", "promotional",
        "flash sale", "flash-sale", "daily deal",
        "today only", "act now", "order now",
        "buy now", "shop now", "get yours",
        "amazon choice", "amazon's choice", "amazon pick",
        "prime", "prime eligible", "prime day",
        "black friday", "cyber monday", "holiday sale",
        "winter sale", "summer sale", "spring sale",
        "seasonal", "seasonal sale", "end of season",
    ),
    "quality_claims": (
        "100%", "one hundred percent", "hundred percent",
        "percent", "certified", "certificate", "certification",
        "proven", "tested", "verified", "validation",
        "award winning", "award-winning", "awarded", "awards",
        "top quality", "highest quality", "superior quality",
        "best quality", "quality assured", "quality guaranteed",
        "professional grade", "professional-grade", "pro grade",
        "official", "officially", "officially licensed",
        "authentic", "authenticity", "genuine", "real",
        "original", "the original", "originals",
        "exclusive", "exclusively", "exclusive design",
        "luxury", "luxurious", "deluxe", "premium quality",
        "world class", "world-class", "worldclass",
        "finest", "the finest", "superior", "elite",
        "ultimate", "the ultimate", "ultimates",
        "perfection", "perfectly",
        "top rated", "top-rated", "toprated",
        "highly rated", "highly-rated", "5 star", "5-star",
        "five star", "number one", "#1", "no. 1",
        "first place", "1st place", "winner", "winning",
    ),
    "sales_pressure": (
        "cheap", "cheapest", "cheaper",
        "affordable", "budget", "budget-friendly",
        "inexpensive", "low cost", "low-cost",
        "buy today", "purchase now",
        "huge sale", "big sale", "massive sale",
        "massive discount", "huge discount", "big discount",
        "unbeatable price", "unbeatable", "cant beat",
        "lowest price", "low price", "reduced price",
        "best price", "price drop", "price cut",
        "act fast", "act today",
        "order today", "get now",
        "shop today", "grab yours",
        "limited quantity", "limited stock", "low stock",
        "few left", "only a few left", "almost gone",
        "selling fast", "sells fast", "going fast",
        "last chance", "final chance", "one time only",
        "don't miss", "dont miss", "miss out",
        "don't wait", "dont wait", "wait no more",
        "limited availability", "while supplies last",
        "until gone", "before its gone", "won't last",
        "expires", "expiring", "ending soon",
    ),
    "trademarks": (
        "nike", "adidas", "puma", "reebok", "under armour",
        "new balance", "asics", "fila", "champion",
        "disney", "pixar", "marvel", "dc comics", "dc universe",
        "warner bros", "warner brothers", "universal",
        "dreamworks", "illumination", "paramount",
        "netflix", "hulu", "hbo", "showtime",
        "mickey mouse", "minnie mouse", "donald duck",
        "harry potter", "hogwarts", "star wars", "jedi",
        "pokemon", "pikachu", "nintendo", "mario", "zelda",
        "minecraft", "fortnite", "roblox", "among us",
        "call of duty", "cod", "halo", "gears of war",
        "playstation", "xbox", "sony", "sega",
        "transformers", "gi joe", "barbie", "hot wheels",
        "lego", "playmobil", "nerf", "hasbro", "mattel",
        "apple", "iphone", "ipad", "macbook", "airpods",
        "google", "android", "pixel", "chromebook",
        "microsoft", "windows", "surface", "office",
        "amazon", "alexa", "kindle", "echo",
        "facebook", "meta", "instagram", "whatsapp",
        "twitter", "tiktok", "snapchat", "youtube",
        "spotify", "twitch",
        "coca cola", "coke", "pepsi", "mountain dew",
        "starbucks", "dunkin", "mcdonalds", "burger king",
        "wendys", "taco bell", "kfc", "subway",
        "red bull", "monster energy", "gatorade",
        "gucci", "prada", "louis vuitton", "chanel",
        "versace", "armani", "burberry", "hermes",
        "ralph lauren", "tommy hilfiger", "calvin klein",
        "levis", "gap", "old navy", "zara", "h&m",
        "nfl", "nba", "mlb", "nhl", "mls", "fifa",
        "ufc", "wwe", "aew", "nascar", "formula 1",
        "olympics", "olympic", "world cup",
        "ford", "chevy", "chevrolet", "dodge", "jeep",
        "toyota", "honda", "nissan", "bmw", "mercedes",
        "audi", "volkswagen", "tesla", "ferrari", "porsche",
    ),
    "service_promises": (
        "fast delivery", "quick shipping", "express shipping",
        "same day", "same-day", "next day", "next-day",
        "overnight", "rush delivery", "expedited",
        "ships fast", "ships quickly", "ships today",
        "in stock", "ready to ship", "ships from usa",
        "domestic shipping", "international shipping",
        "worldwide shipping", "global shipping",
        "tracking", "tracked", "insured shipping",
        "satisfaction guaranteed",
        "30 day return", "30-day return", "easy returns",
        "no questions asked", "hassle free", "hassle-free",
        "customer service", "24/7 support", "live chat",
    ),
    "material_claims": (
        "organic", "organic cotton", "100% cotton",
        "eco friendly", "eco-friendly", "sustainable",
        "recycled", "recyclable", "biodegradable",
        "vegan", "cruelty free", "cruelty-free",
        "fair trade", "fairtrade", "ethically made",
        "handmade", "hand made", "hand-made",
        "made in usa", "made in america", "american made",
        "imported", "hand crafted", "handcrafted",
        "artisan", "artisanal", "bespoke", "custom made",
    ),
    "inappropriate": (
        "explicit", "adult", "mature", "nsfw",
        "sexy", "sexual", "erotic", "nude",
        "violence", "violent", "gore", "gory",
        "blood", "bloody", "death", "kill", "murder",
        "hate", "hatred", "racist", "racism",
        "discrimination", "offensive", "vulgar",
        "profanity", "swear", "curse", "damn", "hell",
        "marijuana", "cannabis", "weed",
        "cocaine", "heroin", "meth", "lsd", "mdma",
        "alcohol", "beer", "wine", "vodka", "whiskey",
        "drunk", "intoxicated", "high", "stoned",
        "weapon", "weapons", "gun", "guns", "firearm",
        "knife", "knives", "bomb", "explosive",
    ),
})

# Flattened, de-duplicated, in category order
ALL_MERCH_BANNED_WORDS: Tuple[str, ...] = tuple(dict.fromkeys(
    word for words in MERCH_BANNED_WORDS.values() for word in words
))


@lru_cache(maxsize=8)
def _compile_banned_pattern(words: Tuple[str, ...]) -> Optional[Pattern]:
    """
    One alternation for the whole vocabulary, longest phrases first so
    'tank tops' wins over 'tank top'. Lookarounds instead of \\b so entries
    that start or end with punctuation ('#1', '100%') still match.
    """
    if not words:
        return None
    ordered = sorted({w.lower() for w in words if w}, key=len, reverse=True)
    alternation = "|".join(re.escape(word) for word in ordered)
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)


def _pattern_for(banned_words: Optional[Iterable[str]]) -> Optional[Pattern]:
    words = ALL_MERCH_BANNED_WORDS if banned_words is None else tuple(banned_words)
    return _compile_banned_pattern(words)


def find_banned_words(text: Optional[str], banned_words: Optional[Iterable[str]] = None) -> List[str]:
    """Return the banned entries present in text (lowercased, unique)."""
    if not text:
        return []
    pattern = _pattern_for(banned_words)
    if pattern is None:
        return []
    found = []
    for match in pattern.finditer(text):
        word = match.group(0).lower()
        if word not in found:
            found.append(word)
    return found


def contains_banned_words(text: Optional[str], banned_words: Optional[Iterable[str]] = None) -> bool:
    if not text:
        return False
    pattern = _pattern_for(banned_words)
    return bool(pattern and pattern.search(text))


def remove_banned_words(text: Optional[str], banned_words: Optional[Iterable[str]] = None) -> str:
    """
    Remove every banned entry from text and collapse whitespace.

    Removal repeats until nothing changes: dropping one word can join its
    neighbours into a new banned phrase ("tank gift top" -> "tank top").
    """
    if not text:
        return ""
    pattern = _pattern_for(banned_words)
    cleaned = re.sub(r"\s+", " ", text).strip()
    if pattern is None:
        return cleaned

    while True:
        reduced = re.sub(r"\s+", " ", pattern.sub("", cleaned)).strip()
        if reduced == cleaned:
            return reduced
        cleaned = reduced
