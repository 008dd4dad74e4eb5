"""Runtime settings for schema sampling and form generation."""

from dataclasses import dataclass

from dotenv import load_dotenv

from common.config.env import get_env_bool, get_env_choice, get_env_int, get_env_str

MERGE_POLICY_NAMES = ("first_observed", "most_specific_non_null", "most_common")

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"


@dataclass(frozen=True)
class FormGenSettings:
    """Sampling limits and service settings for one generation session."""

    mongodb_uri: str = DEFAULT_MONGODB_URI
    primary_sample_limit: int = 10
    target_sample_limit: int = 5
    preview_values: int = 3
    preview_max_chars: int = 50
    merge_policy: str = "first_observed"
    trace_sampling: bool = False

    @classmethod
    def from_env(cls) -> "FormGenSettings":
        """Build settings from environment variables (and a local .env when present)."""
        load_dotenv()
        settings = cls(
            mongodb_uri=get_env_str("MONGODB_URI", DEFAULT_MONGODB_URI),
            primary_sample_limit=get_env_int("FORMGEN_PRIMARY_SAMPLE_LIMIT", 10),
            target_sample_limit=get_env_int("FORMGEN_TARGET_SAMPLE_LIMIT", 5),
            preview_values=get_env_int("FORMGEN_PREVIEW_VALUES", 3),
            preview_max_chars=get_env_int("FORMGEN_PREVIEW_MAX_CHARS", 50),
            merge_policy=get_env_choice(
                "SCHEMA_MERGE_POLICY", MERGE_POLICY_NAMES, default="first_observed"
            ),
            trace_sampling=get_env_bool("FORMGEN_TRACE_SAMPLING", False),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Reject limits that would make sampling meaningless."""
        for name in (
            "primary_sample_limit",
            "target_sample_limit",
            "preview_values",
            "preview_max_chars",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}.")
