"""Demo graphs shipped with the viewer."""

GREEN = "#4aff4a"
BLUE = "#60A5FA"


def agile_frameworks():
    """Five agile frameworks clustered around 'agile'."""
    nodes = [
        {"id": "safe", "label": "SAFe", "color": GREEN},
        {"id": "less", "label": "LeSS", "color": GREEN},
        {"id": "cynefin", "label": "Cynefin", "color": GREEN},
        {"id": "agile", "label": "Agile", "color": GREEN},
        {"id": "devops", "label": "DevOps", "color": GREEN},
    ]
    edges = [
        {"from": "safe", "to": "agile"},
        {"from": "less", "to": "agile"},
        {"from": "cynefin", "to": "agile"},
        {"from": "devops", "to": "agile"},
        {"from": "safe", "to": "devops"},
        {"from": "less", "to": "devops"},
    ]
    return nodes, edges


def knowledge_network():
    nodes = [
        # Core
        {"id": "business-value", "label": "Business Value", "group": "core",
         "description": "Focusing on measurable outcomes and sustainable growth through value stream optimization"},
        {"id": "digital-tetrahedron", "label": "Digital Tetrahedron", "group": "core",
         "description": "Four interconnected aspects: Complexity thinking, Business Agility, Agile Delivery, and UI/UX"},
        {"id": "complexity", "label": "Complexity", "group": "core",
         "description": "Understanding and navigating complex adaptive systems in organizational transformation"},

        # Methods & frameworks
        {"id": "cynefin", "label": "Cynefin", "group": "framework",
         "description": "Framework for decision-making in different contexts: Clear, Complicated, Complex, Chaotic"},
        {"id": "product-management", "label": "Product Management", "group": "framework",
         "description": "Agile product development and management practices for sustainable growth"},

        # Regions
        {"id": "europe", "label": "Europe", "group": "region",
         "description": "Strategic market entry and scaling in European markets, considering cultural and regulatory aspects"},
        {"id": "latin-america", "label": "Latin America", "group": "region",
         "description": "Market expansion and cultural adaptation strategies for Latin American regions"},
    ]
    for node in nodes:
        node["color"] = BLUE
    edges = [
        {"source": "business-value", "target": "digital-tetrahedron"},
        {"source": "business-value", "target": "complexity"},
        {"source": "complexity", "target": "cynefin"},
        {"source": "digital-tetrahedron", "target": "product-management"},
        {"source": "europe", "target": "business-value"},
        {"source": "latin-america", "target": "business-value"},
    ]
    return nodes, edges


SAMPLES = {
    "agile": agile_frameworks,
    "knowledge": knowledge_network,
}
