"""
PRECISION HEALTH - Symptom Self-Care Guide
==========================================
Static guidance for common complaints: when self-care is reasonable,
what to do, and the red flags that require seeing a doctor.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

log = logging.getLogger("precision_health.symptoms")


@dataclass(frozen=True)
class SymptomGuidance:
    symptom_id: str
    title: str
    self_care: str       # when self-care is appropriate
    action: str          # recommended self-care
    red_flags: Tuple[str, ...]


SYMPTOM_GUIDE = {
    "fever": SymptomGuidance(
        symptom_id="fever",
        title="Fever / common cold",
        self_care="Mild, short-lived fever with fatigue or runny nose, when fluids "
                  "(oral rehydration solution) can be kept down.",
        action="Symptom relief with cold medicine, plenty of sleep and fluids.",
        red_flags=(
            "Fever of 38°C or higher lasting 4 days or more",
            "Severe headache or stiff neck (possible meningitis)",
            "Seizures, impaired consciousness or difficulty breathing",
        ),
    ),
    "pain": SymptomGuidance(
        symptom_id="pain",
        title="Pain (lower back / back)",
        self_care="Mild to moderate muscle pain, pain that changes with posture.",
        action="Keep moving within a comfortable range; use compresses or NSAIDs.",
        red_flags=(
            "Sudden tearing back pain (possible aortic dissection)",
            "Unexplained weight loss, bladder or bowel dysfunction (cauda equina compression)",
            "Severe night pain even at rest",
        ),
    ),
    "stomach": SymptomGuidance(
        symptom_id="stomach",
        title="Digestive symptoms (vomiting / diarrhea)",
        self_care="Mild diarrhea or vomiting when oral rehydration is possible.",
        action="Do not fast; eat small amounts of easily digestible food. "
               "Preventing dehydration (ORS) comes first.",
        red_flags=(
            "Persistent severe abdominal pain",
            "Blood in stool or vomit (including tarry stool)",
            "Signs of severe dehydration (drowsiness, reduced urine output)",
        ),
    ),
    "injury": SymptomGuidance(
        symptom_id="injury",
        title="Injury",
        self_care="Minor abrasions, superficial cuts, foreign bodies fully removed.",
        action="Rinse well with tap water and protect with a moist wound dressing; "
               "avoid disinfectants.",
        red_flags=(
            "Bleeding that does not stop with pressure",
            "Sand or debris that cannot be fully removed (infection / traumatic tattoo risk)",
            "Extensive burns or a joint that cannot be moved",
        ),
    ),
}


def get_symptom_guidance(symptom_ids: Iterable[str]) -> List[SymptomGuidance]:
    """
    Guidance for the selected symptoms, in guide order.

    Unknown identifiers are skipped (logged at debug level).
    """
    selected = {str(s).strip().lower() for s in symptom_ids}
    unknown = selected - SYMPTOM_GUIDE.keys()
    if unknown:
        log.debug("Unknown symptom ids ignored: %s", sorted(unknown))
    return [g for key, g in SYMPTOM_GUIDE.items() if key in selected]
