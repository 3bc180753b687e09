"""
Static Niche Pool

Curated niches used when AI discovery is unavailable or fails, grouped
by category. Immutable; pass a different pool to NicheExplorer to swap it.
"""

from types import MappingProxyType
from typing import Tuple

STATIC_NICHE_POOL = MappingProxyType({
    "professions": (
        "nurse life", "teacher appreciation", "doctor humor", "lawyer jokes", "accountant life",
        "engineer mindset", "software developer", "data scientist", "project manager", "hr professional",
        "social worker", "therapist life", "firefighter pride", "police officer", "paramedic ems",
        "veterinarian", "pharmacist", "dental hygienist", "physical therapist", "occupational therapist",
        "speech pathologist", "school counselor", "librarian", "chef life", "bartender humor",
        "server life", "retail worker", "warehouse worker", "truck driver", "pilot aviation",
        "flight attendant", "real estate agent", "insurance agent", "financial advisor", "electrician",
        "plumber pride", "hvac technician", "mechanic life", "welder", "carpenter",
        "construction worker", "landscaper", "farmer life", "rancher", "fisherman commercial",
    ),
    "hobbies": (
        "fishing enthusiast", "hunting life", "camping lover", "hiking addict", "rock climbing",
        "kayaking", "paddleboarding", "surfing life", "skiing snowboarding", "snowmobiling",
        "atv riding", "motorcycle rider", "car enthusiast", "jeep life", "truck lover",
        "woodworking", "metalworking", "blacksmithing", "pottery ceramics", "knitting crochet",
        "quilting", "sewing crafts", "scrapbooking", "painting art", "photography",
        "gardening", "plant parent", "succulent lover", "houseplant addict", "vegetable gardening",
        "birdwatching", "amateur astronomy", "coin collecting", "stamp collecting", "vinyl records",
        "board games", "tabletop rpg", "video gaming", "pc gaming", "console gaming",
        "retro gaming", "chess player", "poker player", "bowling", "golf life",
        "tennis player", "pickleball", "basketball fan", "football fan", "baseball fan",
        "soccer fan", "hockey fan", "wrestling fan", "mma fan", "boxing fan",
        "running", "marathon runner", "triathlon", "crossfit", "weightlifting",
        "yoga practice", "pilates", "meditation", "journaling", "bullet journal",
        "book lover", "audiobook addict", "true crime fan", "horror fan", "sci-fi fan",
        "fantasy reader", "romance reader", "anime fan", "manga reader", "kpop fan",
        "cosplay", "renaissance faire", "larp", "escape rooms", "axe throwing",
    ),
    "food_and_drink": (
        "coffee addict", "tea lover", "wine enthusiast", "craft beer", "whiskey bourbon",
        "cocktail lover", "home bartender", "bbq pitmaster", "smoking meats", "grilling",
        "sourdough baker", "bread baking", "cake decorating", "home cook", "meal prep",
        "keto diet", "vegan lifestyle", "vegetarian", "foodie", "hot sauce lover",
        "cheese lover", "chocolate addict", "pizza enthusiast", "taco lover", "sushi fan",
        "ramen lover", "instant pot", "air fryer", "cast iron cooking", "sous vide",
    ),
    "family_and_relationships": (
        "mom life", "dad life", "parent humor", "grandma life", "grandpa pride",
        "twin parent", "boy mom", "girl dad", "bonus mom", "stepdad",
        "single mom", "single dad", "foster parent", "adoptive parent", "new parent",
        "toddler parent", "teen parent", "empty nester", "dog mom", "dog dad",
        "cat mom", "cat dad", "crazy cat lady", "multi-pet household", "reptile owner",
        "bird owner", "fish keeper", "horse girl", "chicken keeper", "goat parent",
        "wife life", "husband humor", "married life", "newlywed", "anniversary",
        "sister bond", "brother bond", "best friend", "military spouse", "first responder family",
    ),
    "personality_and_lifestyle": (
        "introvert life", "extrovert energy", "ambivert", "night owl", "early bird",
        "overthinker", "anxious but cute", "neurodivergent pride", "spoonie life", "self care",
        "sarcasm lover", "dry humor", "dark humor", "pun lover", "dad jokes",
        "work from home", "remote worker", "digital nomad", "freelancer", "side hustle",
        "entrepreneur", "small business", "boss babe", "girl boss", "hustle culture",
        "minimalist", "maximalist", "cottagecore", "dark academia", "goblincore",
        "plant witch", "cottage witch", "book witch", "astrology lover", "tarot reader",
    ),
    "life_stages": (
        "class of 2026", "college student", "grad school", "phd life", "first gen college",
        "retirement", "turning 30", "turning 40", "turning 50", "over the hill",
        "birthday month", "bridesmaid", "maid of honor", "bachelor party", "bachelorette",
    ),
    "regional_and_cultural": (
        "texas pride", "florida life", "california dreaming", "midwest nice", "southern charm",
        "new york state", "pacific northwest", "mountain west", "new england", "alaska life",
        "hawaii aloha", "small town", "country life", "farm life", "city life",
        "beach life", "lake life", "river life", "mountain life", "desert life",
        "latino pride", "black excellence", "asian american", "indigenous pride", "irish heritage",
        "italian american", "german heritage", "polish pride", "greek heritage", "jewish humor",
    ),
    "humor_styles": (
        "millennial humor", "gen z energy", "boomer humor", "gen x vibes", "elder millennial",
        "internet culture", "meme lord", "chronically online", "touch grass", "unhinged energy",
        "chaotic good", "lawful evil", "petty energy", "unbothered", "main character",
        "villain era", "soft life", "feral energy", "goblin mode",
    ),
})


def flatten_pool(pool=STATIC_NICHE_POOL) -> Tuple[str, ...]:
    """All niches in category order, de-duplicated."""
    return tuple(dict.fromkeys(niche for niches in pool.values() for niche in niches))


ALL_STATIC_NICHES = flatten_pool()
