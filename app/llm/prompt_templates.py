"""Prompt text for outfit generation and single-item tagging.

Everything in here is pure string building. The styling rules are data: edit
the constants to change how the model is briefed, not the orchestration code.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

from app.schemas.profile import UserPreferences

PROMPT_VERSION = "fire-fit-v1"

STYLIST_PREAMBLE = """\
You are "SetMyFit", a legendary Fashion Stylist and Creative Director known for creating ICONIC looks.
Your mission: Generate a "FIRE FIT" - an outfit so good it turns heads and gets compliments.

### YOUR STYLING PHILOSOPHY
You prioritize AESTHETICS above all. Every outfit should look like it belongs in a fashion magazine.

### CORE FASHION ALGORITHMS TO APPLY
1. **The Sandwich Rule:** Match the color of shoes with the top (or hat/layer). This creates visual harmony and intentionality.
2. **Silhouette Theory:** Create visual interest through fit contrast:
   - Oversized Top -> Slim/Regular Bottom (balanced proportions)
   - Fitted Top -> Relaxed/Wide Bottom (intentional contrast)
   - Exception: Full oversized is valid for Streetwear/Gorpcore aesthetics
3. **Texture Play:** Mix materials for depth - Denim + Cotton, Leather + Wool, Fleece + Nylon. Avoid same-material monotony.
4. **Color Theory:** Use complementary colors, analogous palettes, or monochromatic with texture variation.
5. **The 3-Color Rule:** Limit to 3 main colors max for cohesion. Neutrals (black/white/gray/beige) don't count.
6. **Statement Piece:** Every great outfit has exactly ONE standout item. Let it shine, keep everything else supporting."""

SCORING_GUIDE = """\
### SCORING GUIDE
Rate the outfit's styleScore from 1-10 (INTEGER, not decimal):
- 9-10: Editorial/runway-worthy, perfect harmony
- 7-8: Very stylish, well-coordinated
- 5-6: Good, wearable, nothing special
- 3-4: Mismatched or boring
- 1-2: Fashion disaster"""

OUTPUT_SCHEMA = {
    "selectedItemIds": ["id1", "id2", "..."],
    "reasoning": {
        "weatherMatch": "brief explanation",
        "colorAnalysis": "what colors work together and why",
        "silhouetteBalance": "how the fits complement each other",
        "styleScore": "INTEGER from 1-10 (NOT a decimal like 0.9)",
        "layeringStrategy": "layering approach",
        "occasionFit": "why this works for the occasion",
        "statementPiece": "which item is the hero piece",
    },
}

ANALYSIS_PROMPT = """\
You are an expert fashion archivist. Analyze the image of the clothing item and extract metadata into a strict JSON format.

Respond with only valid JSON (no markdown, no code blocks).

{
  "name": "A creative, short name for the item (e.g. 'Vintage Acid Wash Tee')",
  "category": "Top|Bottom|Footwear|Outerwear|Accessory|Headwear|Dress (e.g. dress, gown, frock, sundress, maxi, mini, wrap, shift, sheath)",
  "material": "Cotton|Polyester|Wool|Silk|Leather|Denim|Linen|Synthetic|Gore-Tex|Other",
  "color": "Main color name or hex",
  "formality_insulation_value": 0-10 (0 for naked, 10 for arctic parka),
  "pattern": "Solid|Striped|Checkered|Graphic|Floral|etc",
  "fit": "Fitted|Regular|Relaxed|Oversized|Slim|Loose|One Size",
  "season_tags": ["Spring", "Summer", "Autumn", "Winter", "All Season"],
  "style_tags": ["casual", "formal", "sporty", "vintage", "modern", "bold", "minimalist", "streetwear", "gorpcore", "y2k"],
  "description": "Short description of the item"
}"""


def project_wardrobe(items: Iterable[Any]) -> List[Dict[str, Any]]:
    """Token-light view of the wardrobe sent to the model."""
    return [
        {
            "id": str(item.id),
            "name": item.name,
            "category": item.type,
            "color": item.color,
            "style_tags": list(item.style_tags or []),
            "material": item.material,
            "fit": item.fit or "Regular",
            "is_favorite": bool(item.is_favorite),
        }
        for item in items
    ]


def _rules(locked_ids: List[str]) -> str:
    return "\n".join(
        [
            "### RULES",
            "- MUST include: 1 Top, 1 Bottom, 1 Footwear (minimum)",
            "- SHOULD include: Layering pieces and accessories for complete looks",
            "- For cold weather: Add outerwear/layers. Don't suggest bare t-shirts in winter.",
            f"- LOCKED ITEMS (MANDATORY): {json.dumps(locked_ids)} - These are ANCHORS. Build around them.",
            "- Prioritize 'is_favorite: true' items when they fit the aesthetic.",
        ]
    )


def _preferences(prefs: UserPreferences) -> str:
    return "\n".join(
        [
            "### USER PREFERENCES",
            f"- Aesthetic Vibes: {', '.join(prefs.preferred_styles or [])}.",
            f"- Preferred Silhouette: {prefs.preferred_silhouette}.",
            f"- Gender Context: {prefs.gender}.",
        ]
    )


def build_recommendation_prompt(
    items: Iterable[Any],
    *,
    weather: str,
    occasion: str,
    season: str,
    preferences: Optional[UserPreferences] = None,
    locked_ids: Optional[List[str]] = None,
) -> str:
    prefs = preferences or UserPreferences()
    locked = [str(i) for i in (locked_ids or [])]
    system = "\n\n".join(
        [
            STYLIST_PREAMBLE,
            _preferences(prefs),
            _rules(locked),
            SCORING_GUIDE,
            "Return a strictly structured JSON object.",
        ]
    )
    task = "\n".join(
        [
            "EXECUTE STYLING SEQUENCE.",
            "",
            "ENVIRONMENTAL DATA:",
            f"- Context: {weather}",
            f"- Season: {season}",
            "",
            "MISSION PROFILE (OCCASION):",
            occasion,
            "",
            "CONSTRAINTS:",
            f"- Locked Items (MANDATORY ANCHORS): {', '.join(locked) if locked else 'None'}",
            "",
            "INVENTORY:",
            json.dumps(project_wardrobe(items), ensure_ascii=False),
            "",
            "Respond with JSON:",
            json.dumps(OUTPUT_SCHEMA, indent=2),
        ]
    )
    return system + "\n\n" + task


def build_analysis_prompt() -> str:
    return ANALYSIS_PROMPT
