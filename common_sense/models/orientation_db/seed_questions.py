import logging

from sqlalchemy.orm import Session

from common_sense.core.database import atomic
from common_sense.models.orientation_db.opinion_question_db import OpinionQuestion


logger = logging.getLogger(__name__)

_SCALE = [
    {"label": "Strongly disagree", "value": -10},
    {"label": "Disagree", "value": -5},
    {"label": "Neutral", "value": 0},
    {"label": "Agree", "value": 5},
    {"label": "Strongly agree", "value": 10},
]

question_data = [
    {
        "id": "economy-markets",
        "prompt": "Free markets allocate resources better than government programs.",
    },
    {
        "id": "climate-regulation",
        "prompt": "Stricter environmental regulation is worth slower economic growth.",
    },
    {
        "id": "immigration-levels",
        "prompt": "The country should admit more immigrants each year.",
    },
    {
        "id": "public-healthcare",
        "prompt": "Healthcare should be provided by a single public system.",
    },
    {
        "id": "speech-platforms",
        "prompt": "Online platforms should remove misleading political content.",
    },
    {
        "id": "local-control",
        "prompt": "Most decisions are best made by local rather than national government.",
    },
]


def seed_opinion_questions(db: Session) -> int:
    """Insert the default questions that are not in the table yet."""
    existing = {row[0] for row in db.query(OpinionQuestion.id).all()}
    created = 0

    with atomic(db):
        for position, data in enumerate(question_data):
            if data["id"] in existing:
                continue
            db.add(
                OpinionQuestion(
                    id=data["id"],
                    prompt=data["prompt"],
                    options=list(_SCALE),
                    position=position,
                )
            )
            created += 1

    if created:
        logger.info("Seeded %d opinion questions", created)
    return created
