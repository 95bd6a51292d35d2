"""
WBS cost categorization patterns.

Level-2 categories are matched against canonical WBS names. Level-1
categories are matched against the level-2 category names already assigned to
an item. Dict order is the matching order and is part of the output.

Keywords are literal, lower-case substrings (no regex, no word boundaries).
Category names must not contain one another within a layer.
"""

# Level 2 - fine-grained cost categories
LEVEL2_PATTERNS = {
    # Design & NRE
    "engineering_design": {
        "keywords": [
            "design", "engineering", "drawing", "specification", "basis of design",
        ],
        "description": "Engineering & Design",
    },
    "permits_and_studies": {
        "keywords": [
            "permit", "study", "survey", "geotech", "environmental",
        ],
        "description": "Permits & Studies",
    },
    "prototyping": {
        "keywords": [
            "prototype", "non recurring", "pilot build", "mockup", "first article",
        ],
        "description": "Prototyping & NRE",
    },

    # Process equipment
    "process_tools": {
        "keywords": [
            "process tool", "reactor", "furnace", "chamber", "etch", "deposition",
        ],
        "description": "Process Tools",
    },
    "process_skids": {
        "keywords": [
            "skid", "pump", "compressor", "heat exchanger", "vessel", "tank",
        ],
        "description": "Process Skids & Vessels",
    },

    # Standard equipment
    "furniture": {
        "keywords": [
            "furniture", "desk", "chair", "cabinet", "shelving",
        ],
        "description": "Furniture",
    },
    "it_hardware": {
        "keywords": [
            "computer", "laptop", "server", "network switch", "printer",
        ],
        "description": "IT Hardware",
    },
    "lab_equipment": {
        "keywords": [
            "lab equipment", "fume hood", "bench", "microscope", "centrifuge",
        ],
        "description": "Lab Equipment",
    },

    # Construction
    "sitework": {
        "keywords": [
            "site prep", "grading", "excavation", "paving", "landscap", "demolition",
        ],
        "description": "Sitework",
    },
    "concrete": {
        "keywords": [
            "concrete", "slab", "rebar", "formwork", "foundation",
        ],
        "description": "Concrete",
    },
    "structural_steel": {
        "keywords": [
            "steel", "structural", "beam", "column", "joist",
        ],
        "description": "Structural Steel",
    },
    "building_envelope": {
        "keywords": [
            "roof", "cladding", "facade", "window", "curtain wall",
        ],
        "description": "Building Envelope",
    },
    "interior_finishes": {
        "keywords": [
            "drywall", "ceiling", "flooring", "paint", "finishes",
        ],
        "description": "Interior Finishes",
    },

    # Installation
    "mechanical_install": {
        "keywords": [
            "mechanical install", "hvac", "ductwork", "rigging", "setting equipment",
        ],
        "description": "Mechanical Installation",
    },
    "electrical_install": {
        "keywords": [
            "electrical", "wiring", "conduit", "cable tray", "lighting", "switchgear",
        ],
        "description": "Electrical Installation",
    },
    "piping": {
        "keywords": [
            "piping", "pipe", "plumbing", "valve", "weld",
        ],
        "description": "Piping",
    },

    # Automation
    "controls": {
        "keywords": [
            "control", "plc", "scada", "dcs", "hmi",
        ],
        "description": "Controls",
    },
    "instrumentation": {
        "keywords": [
            "instrument", "sensor", "transmitter", "analyzer", "gauge",
        ],
        "description": "Instrumentation",
    },
    "software_licenses": {
        "keywords": [
            "software", "license", "licence", "subscription",
        ],
        "description": "Software & Licenses",
    },

    # Commissioning
    "startup": {
        "keywords": [
            "startup", "start up", "commissioning", "energization", "punch list",
        ],
        "description": "Startup",
    },
    "validation": {
        "keywords": [
            "validation", "qualification", "iq oq pq", "acceptance test", "calibration",
        ],
        "description": "Validation & Qualification",
    },
    "training": {
        "keywords": [
            "training", "operator", "manual", "handover",
        ],
        "description": "Training & Handover",
    },

    # Project management & indirects
    "pm_fees": {
        "keywords": [
            "project management", "supervision", "general conditions", "overhead",
            "management fee",
        ],
        "description": "Project Management Fees",
    },
    "insurance": {
        "keywords": [
            "insurance", "bond", "warranty",
        ],
        "description": "Insurance & Bonds",
    },
    "contingency_reserve": {
        "keywords": [
            "contingency", "escalation", "allowance", "reserve",
        ],
        "description": "Contingency",
    },
    "freight": {
        "keywords": [
            "freight", "shipping", "logistics", "delivery", "crating",
        ],
        "description": "Freight & Logistics",
    },
}


# Level 1 - coarse cost categories, each a fixed group of level-2 names
LEVEL1_PATTERNS = {
    "design_and_nre": {
        "subsumes": ["engineering_design", "permits_and_studies", "prototyping"],
        "description": "Design & NRE",
    },
    "process_equipment": {
        "subsumes": ["process_tools", "process_skids"],
        "description": "Process Equipment",
    },
    "standard_equipment": {
        "subsumes": ["furniture", "it_hardware", "lab_equipment"],
        "description": "Standard Equipment",
    },
    "construction": {
        "subsumes": [
            "sitework", "concrete", "structural_steel", "building_envelope",
            "interior_finishes",
        ],
        "description": "Construction",
    },
    "installation": {
        "subsumes": ["mechanical_install", "electrical_install", "piping"],
        "description": "Installation",
    },
    "automation": {
        "subsumes": ["controls", "instrumentation", "software_licenses"],
        "description": "Automation & Controls",
    },
    "commissioning": {
        "subsumes": ["startup", "validation", "training"],
        "description": "Commissioning & Qualification",
    },
    "project_management": {
        "subsumes": ["pm_fees", "insurance", "contingency_reserve", "freight"],
        "description": "Project Management & Indirects",
    },
}
