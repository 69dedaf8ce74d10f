"""Configuration handling for git-worktree-ops"""

from dataclasses import dataclass, field
from typing import Optional, List


DEFAULT_STASH_MESSAGE = "auto-stash before branch switch"


@dataclass
class Config:
    """Configuration for git-worktree-ops with validation."""

    # Label used for the stash entry created before a branch switch
    stash_message: str = DEFAULT_STASH_MESSAGE
    # Substrings of `git stash pop` error output that mean "conflict"
    conflict_markers: List[str] = field(default_factory=lambda: ["CONFLICT", "conflict"])
    # Seconds before a git invocation is killed (None = wait forever)
    git_timeout: Optional[float] = None

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_stash_message()
        self._validate_conflict_markers()
        self._validate_git_timeout()

    def _validate_stash_message(self):
        """Validate stash_message is not empty."""
        if not self.stash_message or not self.stash_message.strip():
            raise ValueError("stash_message cannot be empty")
        self.stash_message = self.stash_message.strip()

    def _validate_conflict_markers(self):
        """Validate conflict_markers is a non-empty list of strings."""
        if not isinstance(self.conflict_markers, list):
            raise ValueError("conflict_markers must be a list")
        if not self.conflict_markers or not all(isinstance(m, str) and m for m in self.conflict_markers):
            raise ValueError("conflict_markers must contain at least one non-empty string")

    def _validate_git_timeout(self):
        """Validate git_timeout is positive when set."""
        if self.git_timeout is not None and self.git_timeout <= 0:
            raise ValueError(f"git_timeout must be positive, got {self.git_timeout}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "stash_message": self.stash_message,
            "conflict_markers": list(self.conflict_markers),
            "git_timeout": self.git_timeout,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key, mirroring dict access."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "stash_message",
            "conflict_markers",
            "git_timeout",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def resolve_config(config) -> Config:
    """Accept a Config, a plain dict or None and return a Config."""
    if config is None:
        return Config()
    if isinstance(config, Config):
        return config
    return Config.from_dict(config)
