"""
Revision Relay — Prompt Builder
================================

What:  Turns the four optional course fields into the French instruction sent
       to the generation provider.
How:   Missing or empty fields are replaced by fixed defaults, then everything
       is interpolated into ONE template. The fidelity mode only swaps the
       opening instruction and one closing constraint; the HTML formatting
       rules are shared by all modes.
Who:   Called by GenerationRelay for every /api/generate-summary request.

Fidelity modes:
    strict    Reuse exactly the information from the notes and nothing else.
    hybrid    Keep every note, allow short additions that never contradict them.
    creative  Treat the notes as a starting point and enrich freely.
"""

from enum import Enum
from typing import Optional


class FidelityMode(str, Enum):
    """How closely the revision sheet must follow the student's notes."""

    STRICT = "strict"
    HYBRID = "hybrid"
    CREATIVE = "creative"


# ── Defaults for absent fields ────────────────────────────────────────────
DEFAULT_RAW_TEXT = (
    "L'utilisateur n'a pas fourni de contenu de prise de notes, "
    "mais souhaite une fiche de révision."
)
DEFAULT_COURSE_NAME = "Sans titre"
DEFAULT_COURSE_DESCRIPTION = "Cours de Licence Professionnelle Banque."
DEFAULT_COURSE_DETAILS = "Aucune consigne particulière sur l'organisation."


_MODE_INSTRUCTIONS = {
    FidelityMode.STRICT: (
        "génère une fiche synthèse claire et structurée en reprenant les mêmes "
        "informations que sur la prise de note, sans rien inventer."
    ),
    FidelityMode.HYBRID: (
        "génère une fiche synthèse claire et structurée qui reprend fidèlement "
        "les informations de la prise de note, complétées si besoin par de brefs "
        "éclaircissements."
    ),
    FidelityMode.CREATIVE: (
        "génère une fiche synthèse claire et structurée en t'appuyant sur la "
        "prise de note comme point de départ."
    ),
}

_MODE_CONSTRAINTS = {
    FidelityMode.STRICT: (
        "- Récupérer l'entièreté des informations notées sur la prise de note, "
        "et bien remplir la fiche synthèse, sans ajouter d'information absente des notes."
    ),
    FidelityMode.HYBRID: (
        "- Récupérer l'entièreté des informations notées sur la prise de note ; "
        "tu peux ajouter de courts compléments utiles (définitions, exemples) "
        "à condition qu'ils ne contredisent jamais les notes."
    ),
    FidelityMode.CREATIVE: (
        "- Tu peux librement enrichir la fiche avec des explications, des "
        "définitions et des exemples complémentaires pertinents."
    ),
}

PROMPT_TEMPLATE = """
Tu es un professeur de Licence Professionnelle Banque.
À partir du document suivant (prise de notes d'étudiant) et des consignes, {instruction}

Nom du cours : {course_name}
Description du cours :
{course_description}

Consignes d'organisation données par l'étudiant :
{course_details}

Texte de prise de notes :
\"\"\"
{raw_text}
\"\"\"

Contraintes pour la fiche :
- Génère la fiche au format HTML simple (<h1>, <h2>, <h3>, <p>, <ul>, <li>, <strong>, <em>).
- Pas de balise <html>, <head> ou <body>, uniquement le contenu.
- Titre principal du cours en <h1>.
- Parties numérotées en <h2> (1., 2., 3., ...).
- Sous-parties en <h3> si nécessaire.
- Listes à puces avec <ul><li> pour les définitions, exemples, points clés.
- Mets en évidence les notions importantes avec <strong>.
- Tu peux ajouter quelques emojis pertinents (mais pas trop) pour rendre la fiche agréable à lire.
- Style concis, adapté à un étudiant qui révise la Licence Pro Banque.
- Fiche en français.
{fidelity_constraint}

Donne uniquement le HTML de la fiche, sans texte explicatif autour.
"""


def _or_default(value: Optional[str], default: str) -> str:
    return value if value else default


def build_prompt(
    raw_text: Optional[str] = None,
    course_name: Optional[str] = None,
    course_description: Optional[str] = None,
    course_details: Optional[str] = None,
    mode: FidelityMode = FidelityMode.STRICT,
) -> str:
    """
    Build the full prompt for one revision sheet.

    Args:
        raw_text:            The student's notes.
        course_name:         Course title, rendered as the sheet's <h1>.
        course_description:  Free-text description of the course.
        course_details:      The student's organisational instructions.
        mode:                Fidelity mode selecting the instruction wording.

    Returns:
        The interpolated prompt. Any argument that is None or empty is
        replaced by its DEFAULT_* constant.
    """
    mode = FidelityMode(mode)
    return PROMPT_TEMPLATE.format(
        instruction=_MODE_INSTRUCTIONS[mode],
        course_name=_or_default(course_name, DEFAULT_COURSE_NAME),
        course_description=_or_default(course_description, DEFAULT_COURSE_DESCRIPTION),
        course_details=_or_default(course_details, DEFAULT_COURSE_DETAILS),
        raw_text=_or_default(raw_text, DEFAULT_RAW_TEXT),
        fidelity_constraint=_MODE_CONSTRAINTS[mode],
    )
