"""Static text pools for offline readings and chat replies.

Everything here is read-only after import.
"""

from typing import Dict, NamedTuple, Tuple


class OverallTemplate(NamedTuple):
    """An overall reading with one slot for a context clause.

    `keyed_on` says which piece of user context the template prefers when
    both are available ("hand" or "focus"). `focus` is formatted with the
    user's focus area.
    """
    text: str
    keyed_on: str
    left: str
    right: str
    focus: str
    generic: str


# -------------------------------------------------------------------
# LINES
# -------------------------------------------------------------------

HEART_OBSERVATIONS: Tuple[str, ...] = (
    "Your heart line rises in a soft curve and comes to rest beneath your index finger",
    "A deep, unbroken heart line crosses your palm with gentle waves along its length",
    "Your heart line divides near its end, one branch reaching toward the mount of Jupiter",
    "The heart line runs long and clear, deepening where it passes the middle finger",
    "A sweeping heart line arcs across the upper palm with quiet strength",
)

HEART_MEANINGS: Tuple[str, ...] = (
    "You love with your whole self and the bonds you form tend to last for years.",
    "Your emotional intelligence carries you through complicated situations with grace.",
    "You are capable of profound devotion, though you choose carefully where it goes.",
    "Your inner world is rich and textured; you feel deeply and love on purpose.",
    "You let heart and mind share the decision, and both are honored by it.",
)

HEAD_OBSERVATIONS: Tuple[str, ...] = (
    "Your head line travels straight and purposeful across the center of your palm",
    "A gently sloping head line bends toward the mount of the Moon",
    "The head line is deep and even, dipping slightly toward imagination at its end",
    "Your head line starts apart from the life line, a sign of early independence",
    "A long, well-defined head line stretches almost to the edge of your palm",
)

HEAD_MEANINGS: Tuple[str, ...] = (
    "You have a sharp, analytical mind that cuts through confusion to what is true.",
    "You pair creativity with practicality; you dream widely and plan carefully.",
    "Clarity is your gift; you notice patterns others pass by without seeing.",
    "You think for yourself and are rarely swayed by fashion or the crowd.",
    "Your curiosity has no edges, and learning will stay a lifelong pleasure.",
)

LIFE_OBSERVATIONS: Tuple[str, ...] = (
    "The life line sweeps in a wide arc around the base of your thumb",
    "Your life line is deep and clear, curving outward with confidence",
    "A strong life line circles the mount of Venus without hesitation",
    "The life line begins boldly and keeps its strength along the whole journey",
    "Your life line carries small shifts in depth that mark meaningful transitions",
)

LIFE_MEANINGS: Tuple[str, ...] = (
    "You hold deep reserves of energy and the resilience to meet hard seasons.",
    "Your vitality is strong; you bring warmth and drive to whatever you begin.",
    "Important positive changes are gathering on the road in front of you.",
    "Your strength shows up exactly when it is needed, often to your own surprise.",
    "Your life force is bright, and others draw courage simply from your presence.",
)

# Fallback readings cannot judge visibility, so the fate line is always given.
FATE_LINE: Dict[str, str] = {
    "observation": "A faint fate line rises from the base of your palm toward the middle finger.",
    "meaning": "The direction of your life is growing clearer; trust the path as it reveals itself.",
}


# -------------------------------------------------------------------
# OVERALL READINGS
# -------------------------------------------------------------------

OVERALL_TEMPLATES: Tuple[OverallTemplate, ...] = (
    OverallTemplate(
        text=(
            "Your palm shows a rare harmony between heart, mind, and spirit, the mark of someone "
            "who has met difficulty with grace and come through wiser. {clause} "
            "A season of growth and fulfillment is approaching."
        ),
        keyed_on="hand",
        left="Your left hand holds the gifts you were born with, and they are considerable.",
        right="Your right hand shows what you are actively building, and it is remarkable.",
        focus="Where {focus} is concerned, those gifts are already stirring.",
        generic="What you were given and what you are building point the same way.",
    ),
    OverallTemplate(
        text=(
            "The Oracle sees a soul on the edge of transformation, carrying wisdom it has not yet "
            "fully spent. {clause} The universe has noticed your efforts."
        ),
        keyed_on="focus",
        left="Your receiving hand hints that the change begins within.",
        right="Your active hand hints that the change begins with a choice you make.",
        focus="In matters of {focus}, the spirits whisper of welcome change drawing near.",
        generic="Trust the journey that is unfolding before you.",
    ),
    OverallTemplate(
        text=(
            "Your palm tells a story of resilience and hope, its major lines turning old struggles "
            "into future strengths. {clause} Beautiful chapters are still unwritten."
        ),
        keyed_on="hand",
        left="Your receptive hand reveals deep intuitive gifts.",
        right="Your active hand shows you taking the reins of your own destiny.",
        focus="The story bends most brightly toward {focus}.",
        generic="Each line carries its lesson forward into the next.",
    ),
    OverallTemplate(
        text=(
            "The lines of your palm weave a tapestry of promise, heart and head working together "
            "toward meaningful connection. {clause} Trust your inner compass."
        ),
        keyed_on="focus",
        left="Your left hand suggests the answers are already part of you.",
        right="Your right hand suggests the answers lie in what you do next.",
        focus="The energy around {focus} burns especially bright in this reading.",
        generic="Every part of your life is moving toward balance.",
    ),
    OverallTemplate(
        text=(
            "Your palm radiates quiet strength and untapped potential, a soul that has learned much "
            "and has more to discover. {clause} Walk forward with confidence."
        ),
        keyed_on="hand",
        left="Your innate talents are your greatest treasures.",
        right="Your actions are shaping a future full of purpose.",
        focus="That potential gathers most strongly around {focus}.",
        generic="What you have gathered so far is only the beginning.",
    ),
)


# -------------------------------------------------------------------
# ADVICE
# -------------------------------------------------------------------

ADVICE: Tuple[str, ...] = (
    "Trust your intuition; experience has sharpened it and it will not lead you astray.",
    "The path may look unclear, but each step you take lights the next one. Keep moving.",
    "Open your heart to new possibilities; gifts are forming that you cannot yet imagine.",
    "Balance is your key to fulfillment, so tend both your ambitions and your peace.",
    "Your greatest strength is your authenticity. Never dim your light for anyone's comfort.",
    "What you seek is also seeking you. Stay open and patient.",
    "Release what no longer serves you; your hands are meant to receive new blessings.",
)


# -------------------------------------------------------------------
# CHAT
# -------------------------------------------------------------------

# Checked in this order; the first category with a matching keyword wins.
CHAT_CATEGORY_ORDER: Tuple[str, ...] = ("career", "love", "destiny")

CHAT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "career": ("job", "career", "work", "money"),
    "love": ("love", "heart", "relationship", "marriage"),
    "destiny": ("fate", "destiny", "future", "life"),
}

CHAT_RESPONSES: Dict[str, Tuple[str, ...]] = {
    "career": (
        "The lines of your palm suggest a shift in your working energy is drawing near.",
        "Your head line speaks of a sharp mind that will carry you far if you trust its gifts.",
        "The spirits see a path where your particular talents are finally recognized.",
    ),
    "love": (
        "Your heart line speaks of deep emotional potential and the beauty of connection.",
        "The mounts of your palm suggest that openness will bring the harmony you seek.",
        "A warm energy surrounds your emotional life; patience will reveal how deep it runs.",
    ),
    "destiny": (
        "Destiny is not a fixed road but a tapestry you weave with every choice.",
        "The cosmic energy around you is vivid; the spirits are steering you toward your purpose.",
        "Your fate line, though subtle, belongs to a soul learning to command its own future.",
    ),
    "general": (
        "The Oracle hears your question, though the spirit realm is clouded for now.",
        "Trust the wisdom already written in the lines of your palm.",
        "Look within; your heart already knows the answer you are searching for.",
        "The stars suggest this is a time for reflection rather than action.",
    ),
}
