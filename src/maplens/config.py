# MapLens — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
	"""Application settings with sane defaults.

	Environment variables are prefixed with MAPLENS_. CLI flags can override.
	List values (MAPLENS_SITEMAP_PATHS) are read as JSON arrays.
	"""

	model_config = SettingsConfigDict(env_prefix="MAPLENS_", env_file=".env", extra="ignore")

	user_agent: str = Field(default="MapLens/0.1 (+https://example.com)")
	sitemap_paths: List[str] = Field(default_factory=lambda: ["/sitemap.xml", "/sitemap_index.xml"])
	lenient: bool = Field(default=False)
	temp_dir: Optional[str] = Field(default=None)
	store_path: str = Field(default="data/resolved_roots.json")
	data_dir: str = Field(default="data")
	use_robots: bool = Field(default=True)
	workers: int = Field(default=4, ge=1)
	timeout: float = Field(default=15.0, gt=0)
	min_delay: float = Field(default=0.0, ge=0)
	retries: int = Field(default=3, ge=0)
	backoff: float = Field(default=0.5, ge=0)
	log_level: str = Field(default="INFO")

