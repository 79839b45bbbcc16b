from prompt_curator.core.startup import bootstrap
from prompt_curator.database.db import get_db_session
from prompt_curator.database.init_db import init_db
from prompt_curator.database.models import Prompt
from prompt_curator.schemas.prompts import CreatePromptInput
from prompt_curator.services.prompt_service import PromptService

SAMPLE_PROMPTS = [
    CreatePromptInput(
        text="A serene landscape with rolling hills, a crystal-clear lake reflecting the golden sunset",
        description="Warm evening scenery",
        tags=["nature", "landscape", "sunset"],
    ),
    CreatePromptInput(
        text="Portrait of an elderly fisherman, dramatic side lighting, 85mm film photograph",
        description=None,
        tags=["portrait", "photography"],
    ),
    CreatePromptInput(
        text="Isometric cyberpunk city block at night, neon signage, rain-soaked streets",
        description="Works well with square aspect ratios",
        image_url="https://example.com/generated/cyberpunk-block.jpg",
        tags=["city", "cyberpunk", "isometric"],
    ),
]


def seed_prompts() -> None:
    with get_db_session() as session:
        if session.query(Prompt).count():
            print("Prompts already seeded.")
            return

        service = PromptService(db=session)
        created = [service.create_prompt(sample) for sample in SAMPLE_PROMPTS]
        print(f"Seeded {len(created)} prompts.")


if __name__ == "__main__":
    bootstrap()
    init_db()
    seed_prompts()
