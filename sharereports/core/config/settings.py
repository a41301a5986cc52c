# (c) Copyright Datacraft, 2026
"""Application settings configuration."""
from pathlib import Path

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	"""
	Run configuration for the report generator.

	Environment variables are prefixed with SR_. Built once at startup,
	then overridden by command line flags and passed explicitly to every
	component.
	"""

	# Remote document store
	domain: str = 'localhost'
	token: str = ''
	timeout: float = Field(gt=0, default=30.0)
	verify_tls: bool | None = Field(
		default=None,
		description="Verify TLS certificates; disabled automatically for localhost",
	)

	# Crawl behaviour
	concurrency: int = Field(
		gt=0,
		default=10,
		description="Maximum simultaneous fan-out tasks and in-flight fetches",
	)
	max_attempts: int = Field(
		gt=0,
		default=5,
		description="Attempts per fetch before a transient failure is reported",
	)

	# Output
	fallback_dir: Path = Path(".")

	# Logging
	log_config: Path | None = None
	log_level: str = 'INFO'

	@field_validator('domain')
	@classmethod
	def strip_scheme(cls, v: str) -> str:
		# tolerate a pasted URL
		return v.removeprefix('https://').removeprefix('http://').rstrip('/')

	@computed_field
	@property
	def base_url(self) -> str:
		return f"https://{self.domain}"

	@computed_field
	@property
	def tls_verify(self) -> bool:
		if self.verify_tls is not None:
			return self.verify_tls
		return self.domain.split(':')[0] != 'localhost'

	def with_overrides(self, **overrides) -> "Settings":
		"""Return a copy with the non-empty overrides applied and re-validated."""
		update = {k: v for k, v in overrides.items() if v is not None}
		if not update:
			return self
		return Settings(**{**self.model_dump(exclude={'base_url', 'tls_verify'}), **update})

	model_config = SettingsConfigDict(
		env_prefix='sr_',
		env_file='.env',
		env_file_encoding='utf-8',
		extra='ignore',
	)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
