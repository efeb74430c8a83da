
from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    # Candidate source: "sqlite" or "json"
    candidate_source: str = "sqlite"
    sqlite_path: str = "./data/questions.sqlite"
    corpus_path: str = "./data/questions.json"

    # Fuzzy search
    title_match_weight: float = 0.7
    content_match_weight: float = 0.3
    similarity_threshold: float = 0.5
    max_fuzzy_candidates: int = 100

    # Related questions
    related_title_weight: float = 0.5
    related_content_weight: float = 0.3
    related_tag_weight: float = 0.2
    related_subject_bonus: float = 0.2

    default_limit: int = 20

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "QA_SEARCH_"
        extra = "ignore"


settings = Settings()
