# core/catalog.py
"""
Static catalogs shared by the submission form and the gallery.

Schools, tags and colours are configuration, not logic: validation rules look
values up here instead of branching on them.
"""
from typing import Dict, FrozenSet, List, Tuple

# ============================================================
# 🏫 Schools
# ============================================================
OTHER_SCHOOL = "Other"

SCHOOLS: Tuple[str, ...] = (
    "African Leadership University Rwanda",
    "Arizona State University Campus Immersion",
    "California Institute of Technology",
    "Carnegie Mellon University",
    "Champlain College",
    "Columbia University in the City of New York",
    "Cornell University",
    "Dartmouth College",
    "Duke University",
    "ETH Zurich",
    "Georgetown University",
    "Georgia Institute of Technology-Main Campus",
    "Harvard University",
    "Illinois Institute of Technology",
    "Imperial College London",
    "Indian Institute of Technology Madras",
    "Indiana University-Bloomington",
    "Johns Hopkins University",
    "Kwame Nkrumah University of Science & Technology",
    "London Business School",
    "Makerere University",
    "Massachusetts Institute of Technology",
    "McGill University",
    "Michigan State University",
    "Mila - Quebec Artificial Intelligence Institute",
    "Minnesota State University-Mankato",
    "New Jersey Institute of Technology",
    "New York University",
    "Northeastern University",
    "Northumbria University",
    "Northwestern University",
    "Ohio State University-Main Campus",
    "Pennsylvania State University-Main Campus",
    "Princeton University",
    "Purdue University-Main Campus",
    "Rice University",
    "Stanford University",
    "Syracuse University",
    "Technical University of Munich",
    "The London School of Economics and Political Science",
    "The University of Edinburgh",
    "The University of Texas at Austin",
    "Trinity College Dublin",
    "Université Cheikh Anta Diop de Dakar",
    "University College Cork",
    "University College London",
    "University of California-Berkeley",
    "University of California-Irvine",
    "University of California-Los Angeles",
    "University of California-San Diego",
    "University of Cambridge",
    "University of Cape Town",
    "University of Chicago",
    "University of Exeter",
    "University of Florida",
    "University of Georgia",
    "University of Ghana",
    "University of Illinois Urbana-Champaign",
    "University of Lagos",
    "University of Louisville",
    "University of Maryland-College Park",
    "University of Massachusetts-Amherst",
    "University of Michigan-Ann Arbor",
    "University of Missouri-Columbia",
    "University of Nairobi",
    "University of Nevada-Las Vegas",
    "University of North Carolina at Chapel Hill",
    "University of Oxford",
    "University of Pennsylvania",
    "University of Pittsburgh-Pittsburgh Campus",
    "University of Rwanda",
    "University of San Francisco",
    "University of Southern California",
    "University of Toronto St. George",
    "University of Victoria",
    "University of Virginia-Main Campus",
    "University of Washington-Seattle Campus",
    "University of Waterloo",
    "University of Wisconsin-Madison",
    "Vanderbilt University",
    "Yale University",
    OTHER_SCHOOL,
)

# ============================================================
# 🏷️ Tags
# ============================================================
TAGS: Tuple[str, ...] = (
    "productivity",
    "automation",
    "creative",
    "tool",
    "data analysis",
    "game",
)

TAG_VOCABULARY: FrozenSet[str] = frozenset(TAGS)

TAG_COLORS: Dict[str, str] = {
    "productivity": "warm-blue",
    "automation": "warm-coral",
    "creative": "warm-lavender",
    "tool": "warm-pink",
    "data analysis": "warm-blue",
    "game": "warm-pink",
}

# Gallery cards cycle through these backgrounds in listing order
CARD_COLORS: List[str] = [
    "warm-pink",
    "warm-green",
    "warm-blue",
    "warm-coral",
    "warm-lavender",
]

# ============================================================
# 🔗 Link hosts
# ============================================================
GITHUB_HOSTS: FrozenSet[str] = frozenset({"github.com", "www.github.com"})

ARTIFACT_HOST = "claude.ai"
ARTIFACT_PATH_PREFIX = "/artifacts/"

YOUTUBE_HOSTS: FrozenSet[str] = frozenset({"youtube.com", "www.youtube.com", "youtu.be"})
LOOM_HOSTS: FrozenSet[str] = frozenset({"loom.com", "www.loom.com"})
VIDEO_HOSTS: FrozenSet[str] = YOUTUBE_HOSTS | LOOM_HOSTS

# ============================================================
# 📏 Field bounds
# ============================================================
PROJECT_NAME_MAX = 100
BUILDER_NAME_MAX = 50
SCHOOL_NAME_MAX = 100
DESCRIPTION_MIN = 50
DESCRIPTION_MAX = 250


def card_color(index: int) -> str:
    """Background colour for the card at ``index`` in the gallery."""
    return CARD_COLORS[index % len(CARD_COLORS)]
