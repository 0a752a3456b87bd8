"""Static reference content: cultural practices, health resources and pick lists."""

from typing import Iterable

from heritage_health.models import CulturalPractice, HealthCategory, HealthResource

COMMON_CONDITIONS = [
    "Diabetes",
    "Hypertension",
    "Asthma",
    "Heart Disease",
    "Cancer",
    "Arthritis",
    "Allergies",
    "Obesity",
    "Depression",
    "Anxiety",
]

MEDICATIONS_BY_CONDITION: dict[str, list[str]] = {
    "Diabetes": ["Metformin", "Insulin", "Glipizide"],
    "Hypertension": ["Lisinopril", "Amlodipine", "Hydrochlorothiazide"],
    "Asthma": ["Albuterol", "Fluticasone", "Montelukast"],
    "Heart Disease": ["Aspirin", "Atorvastatin", "Metoprolol"],
    "Cancer": ["Chemotherapy", "Immunotherapy"],
    "Arthritis": ["Ibuprofen", "Naproxen", "Methotrexate"],
    "Allergies": ["Loratadine", "Cetirizine", "Diphenhydramine"],
    "Obesity": ["Orlistat", "Phentermine"],
    "Depression": ["Sertraline", "Fluoxetine", "Citalopram"],
    "Anxiety": ["Alprazolam", "Diazepam", "Buspirone"],
}

COMMON_ALLERGIES = [
    "Penicillin",
    "Peanuts",
    "Shellfish",
    "Latex",
    "Bee Stings",
    "Milk",
    "Eggs",
    "Tree Nuts",
    "Wheat",
    "Soy",
    "Fish",
]

PRACTICE_CATEGORIES = [
    "All",
    "Traditional Medicine",
    "Nutrition",
    "Exercise",
    "Wellness",
    "Mental Health",
    "Physical Activity",
]

CULTURAL_PRACTICES = (
    CulturalPractice(
        name="Ayurveda",
        description="Traditional Indian system of medicine focusing on balance between body, mind, and spirit.",
        region="South Asia",
        category="Traditional Medicine",
        benefits="Holistic wellness, stress reduction, natural healing",
        considerations="Consult healthcare provider before starting new treatments",
    ),
    CulturalPractice(
        name="Traditional Chinese Medicine",
        description="Ancient healing system using acupuncture, herbs, and other practices.",
        region="East Asia",
        category="Traditional Medicine",
        benefits="Pain management, stress relief, improved energy flow",
        considerations="Ensure practitioner is licensed and qualified",
    ),
    CulturalPractice(
        name="Mediterranean Diet",
        description="Traditional eating pattern from Mediterranean region emphasizing whole foods.",
        region="Mediterranean",
        category="Nutrition",
        benefits="Heart health, longevity, reduced inflammation",
        considerations="Adapt to local food availability and personal needs",
    ),
    CulturalPractice(
        name="Hammam",
        description="Traditional Middle Eastern steam bath and cleansing ritual.",
        region="Middle East",
        category="Wellness",
        benefits="Skin health, relaxation, social connection",
        considerations="Stay hydrated, avoid if pregnant or with certain conditions",
    ),
    CulturalPractice(
        name="Forest Bathing",
        description="Japanese practice of immersing oneself in nature for health benefits.",
        region="Japan",
        category="Wellness",
        benefits="Stress reduction, improved mood, better sleep",
        considerations="Be mindful of allergies and weather conditions",
    ),
    CulturalPractice(
        name="Traditional Herbal Medicine",
        description="Use of plants and herbs for medicinal purposes across various cultures.",
        region="Global",
        category="Traditional Medicine",
        benefits="Natural healing, immune support, symptom relief",
        considerations="Research interactions with medications",
    ),
    CulturalPractice(
        name="Mindfulness Meditation",
        description="Buddhist practice of present-moment awareness adapted for modern use.",
        region="Global",
        category="Mental Health",
        benefits="Stress reduction, improved focus, emotional regulation",
        considerations="Start with short sessions, seek guidance if needed",
    ),
    CulturalPractice(
        name="Traditional Dance",
        description="Cultural dance forms that combine physical activity with cultural expression.",
        region="Global",
        category="Physical Activity",
        benefits="Cardiovascular health, coordination, cultural connection",
        considerations="Start slowly, respect cultural significance",
    ),
)


def _resource(title: str, description: str, url: str, category: HealthCategory) -> HealthResource:
    return HealthResource(title=title, description=description, url=url, category=category)


HEALTH_RESOURCES = (
    _resource("American Heart Association", "Learn about heart disease prevention, treatment, and research.", "https://www.heart.org", HealthCategory.HEART),
    _resource("Heart Foundation", "Resources for heart health and cardiovascular disease prevention.", "https://www.heartfoundation.org.au", HealthCategory.HEART),
    _resource("American Diabetes Association", "Resources for diabetes management and prevention.", "https://www.diabetes.org", HealthCategory.DIABETES),
    _resource("Diabetes UK", "Comprehensive diabetes information and support.", "https://www.diabetes.org.uk", HealthCategory.DIABETES),
    _resource("American Cancer Society", "Information about cancer prevention, treatment, and support.", "https://www.cancer.org", HealthCategory.CANCER),
    _resource("Cancer Research UK", "Latest cancer research and treatment information.", "https://www.cancerresearchuk.org", HealthCategory.CANCER),
    _resource("Asthma and Allergy Foundation", "Resources for asthma management and treatment.", "https://www.aafa.org", HealthCategory.ASTHMA),
    _resource("Global Initiative for Asthma", "International asthma guidelines and resources.", "https://ginasthma.org", HealthCategory.ASTHMA),
    _resource("National Institute of Mental Health", "Research and information about mental health conditions.", "https://www.nimh.nih.gov", HealthCategory.MENTAL),
    _resource("Mental Health First Aid", "Training and resources for mental health support.", "https://www.mentalhealthfirstaid.org", HealthCategory.MENTAL),
    _resource("Academy of Nutrition and Dietetics", "Expert nutrition information and resources.", "https://www.eatright.org", HealthCategory.NUTRITION),
    _resource("Nutrition.gov", "Government nutrition information and guidelines.", "https://www.nutrition.gov", HealthCategory.NUTRITION),
    _resource("American College of Sports Medicine", "Exercise guidelines and fitness information.", "https://www.acsm.org", HealthCategory.EXERCISE),
    _resource("CDC Physical Activity Guidelines", "Official physical activity recommendations.", "https://www.cdc.gov/physicalactivity", HealthCategory.EXERCISE),
    _resource("CDC Health Information", "Comprehensive health information from the Centers for Disease Control.", "https://www.cdc.gov", HealthCategory.GENERAL),
    _resource("Mayo Clinic Health Library", "Expert health information and resources.", "https://www.mayoclinic.org", HealthCategory.GENERAL),
    _resource("World Health Organization", "Global health information and guidelines.", "https://www.who.int", HealthCategory.GENERAL),
)


def _matches(text: str, *fields: str) -> bool:
    needle = (text or "").strip().casefold()
    return not needle or any(needle in f.casefold() for f in fields)


def filter_practices(text: str = "", category: str = "All") -> list[CulturalPractice]:
    """Practices whose name or description contains `text`, optionally in one category."""
    return [
        p
        for p in CULTURAL_PRACTICES
        if _matches(text, p.name, p.description) and (category == "All" or p.category == category)
    ]


def filter_resources(
    text: str = "", categories: Iterable[HealthCategory | str] | None = None
) -> list[HealthResource]:
    """Resources whose title or description contains `text`, limited to `categories` if given."""
    wanted = None if categories is None else {HealthCategory(c) for c in categories}
    return [
        r
        for r in HEALTH_RESOURCES
        if _matches(text, r.title, r.description) and (wanted is None or r.category in wanted)
    ]
