"""Bundled catalog shown when neither the cache nor the source yields data.

These entries are never written to the cache.
"""

from __future__ import annotations

from typing import Tuple

from core.models import Availability, CatalogEntry


FALLBACK_ENTRIES: Tuple[CatalogEntry, ...] = (
    CatalogEntry(
        id="fallback-paracetamol-500",
        name="Paracetamol 500mg",
        generic_name="Paracetamol",
        brand="Calpol",
        category="painkillers",
        manufacturer="GSK",
        description="Analgesic and antipyretic for mild to moderate pain and fever.",
        dosage="500mg",
        form="Tablet",
        price=4.99,
        stock=240,
        availability=Availability.IN_STOCK,
        uses=("fever", "headache", "body ache"),
        side_effects=("nausea", "rash"),
        contraindications=("severe liver disease",),
    ),
    CatalogEntry(
        id="fallback-ibuprofen-400",
        name="Ibuprofen 400mg",
        generic_name="Ibuprofen",
        brand="Brufen",
        category="painkillers",
        manufacturer="Abbott",
        description="Non-steroidal anti-inflammatory for pain and inflammation.",
        dosage="400mg",
        form="Tablet",
        price=7.5,
        stock=35,
        availability=Availability.LOW_STOCK,
        uses=("joint pain", "dental pain", "inflammation"),
        side_effects=("heartburn", "dizziness"),
        contraindications=("peptic ulcer", "late pregnancy"),
    ),
    CatalogEntry(
        id="fallback-amoxicillin-500",
        name="Amoxicillin 500mg",
        generic_name="Amoxicillin",
        brand="Amoxil",
        category="antibiotics",
        manufacturer="GSK",
        description="Penicillin-class antibiotic for bacterial infections.",
        dosage="500mg",
        form="Capsule",
        price=12.25,
        stock=120,
        availability=Availability.IN_STOCK,
        prescription_required=True,
        uses=("respiratory tract infection", "ear infection"),
        side_effects=("diarrhoea", "rash"),
        contraindications=("penicillin allergy",),
    ),
    CatalogEntry(
        id="fallback-atorvastatin-20",
        name="Atorvastatin 20mg",
        generic_name="Atorvastatin",
        brand="Lipitor",
        category="cardiac",
        manufacturer="Pfizer",
        description="Statin that lowers LDL cholesterol.",
        dosage="20mg",
        form="Tablet",
        price=28.0,
        stock=60,
        availability=Availability.IN_STOCK,
        prescription_required=True,
        uses=("high cholesterol", "cardiovascular risk reduction"),
        side_effects=("muscle pain", "headache"),
        contraindications=("active liver disease", "pregnancy"),
    ),
    CatalogEntry(
        id="fallback-salbutamol-inhaler",
        name="Salbutamol Inhaler",
        generic_name="Salbutamol",
        brand="Ventolin",
        category="respiratory",
        manufacturer="GSK",
        description="Short-acting bronchodilator for asthma relief.",
        dosage="100mcg/dose",
        form="Inhaler",
        price=18.4,
        stock=0,
        availability=Availability.OUT_OF_STOCK,
        prescription_required=True,
        uses=("asthma", "bronchospasm"),
        side_effects=("tremor", "palpitations"),
        contraindications=("hypersensitivity to salbutamol",),
    ),
    CatalogEntry(
        id="fallback-metformin-500",
        name="Metformin 500mg",
        generic_name="Metformin",
        brand="Glucophage",
        category="diabetes",
        manufacturer="Merck",
        description="First-line oral treatment for type 2 diabetes.",
        dosage="500mg",
        form="Tablet",
        price=9.8,
        stock=300,
        availability=Availability.IN_STOCK,
        prescription_required=True,
        uses=("type 2 diabetes",),
        side_effects=("stomach upset", "metallic taste"),
        contraindications=("severe kidney impairment",),
    ),
    CatalogEntry(
        id="fallback-vitamin-d3-1000",
        name="Vitamin D3 1000 IU",
        generic_name="Cholecalciferol",
        brand="D-Vit",
        category="vitamins",
        manufacturer="Nature Made",
        description="Daily vitamin D supplement.",
        dosage="1000 IU",
        form="Softgel",
        price=11.99,
        stock=18,
        availability=Availability.LOW_STOCK,
        uses=("vitamin D deficiency", "bone health"),
        side_effects=("constipation",),
        contraindications=("hypercalcaemia",),
    ),
    CatalogEntry(
        id="fallback-omeprazole-20",
        name="Omeprazole 20mg",
        generic_name="Omeprazole",
        brand="Prilosec",
        category="digestive",
        manufacturer="AstraZeneca",
        description="Proton pump inhibitor that reduces stomach acid.",
        dosage="20mg",
        form="Capsule",
        price=15.6,
        stock=90,
        availability=Availability.IN_STOCK,
        uses=("acid reflux", "stomach ulcer"),
        side_effects=("headache", "abdominal pain"),
        contraindications=("use with nelfinavir",),
    ),
    CatalogEntry(
        id="fallback-hydrocortisone-cream",
        name="Hydrocortisone Cream 1%",
        generic_name="Hydrocortisone",
        brand="Cortaid",
        category="skincare",
        manufacturer="Johnson & Johnson",
        description="Mild topical corticosteroid for itching and inflammation.",
        dosage="1%",
        form="Cream",
        price=6.75,
        stock=75,
        availability=Availability.IN_STOCK,
        uses=("eczema", "insect bites", "rash"),
        side_effects=("skin thinning", "burning"),
        contraindications=("untreated skin infection",),
    ),
    CatalogEntry(
        id="fallback-insulin-glargine",
        name="Insulin Glargine Pen",
        generic_name="Insulin glargine",
        brand="Lantus",
        category="diabetes",
        manufacturer="Sanofi",
        description="Long-acting basal insulin.",
        dosage="100 units/ml",
        form="Injection",
        price=64.0,
        stock=12,
        availability=Availability.LOW_STOCK,
        prescription_required=True,
        uses=("type 1 diabetes", "type 2 diabetes"),
        side_effects=("hypoglycaemia", "injection site reaction"),
        contraindications=("hypoglycaemia",),
    ),
)
