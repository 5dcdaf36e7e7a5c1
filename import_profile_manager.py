import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import jsonschema

from interval_stats import DEFAULT_TIME_INTERVALS, TimeInterval
from trade_import_parser import TRADE_FIELDS

LOGGER = logging.getLogger(__name__)
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent / "import_profiles"


class ImportProfileManager:
    """
    Named CSV import profiles: the header -> trade field mapping for one
    broker/spreadsheet layout, plus optional numeric defaults and time
    intervals.

    Lookup order: user/, the global user directory, presets/<CONFIG_ENV>/,
    presets/.
    """

    def __init__(
        self,
        config_dir=DEFAULT_CONFIG_DIR,
        default_profile: str = "default",
    ):
        self.config_dir = Path(config_dir)
        self.default_profile = default_profile
        self.schema_path = self.config_dir / "schemas" / "import_profile.schema.json"
        self.local_user_dir = self.config_dir / "user"
        self.global_user_dir = (
            Path.home() / ".config" / "trade-journal-stats" / "import_profiles"
        )
        self.env = os.environ.get("CONFIG_ENV")
        self.profile_cache: Dict[str, Dict[str, Any]] = {}
        self.schema = self._load_schema()

    def _load_schema(self) -> Dict[str, Any]:
        try:
            with open(self.schema_path, "r", encoding="utf-8") as schema_file:
                return json.load(schema_file)
        except FileNotFoundError:
            LOGGER.warning("Import profile schema not found at %s", self.schema_path)
            return {}

    def _validate(self, payload: Dict[str, Any]) -> bool:
        if not self.schema:
            return True
        try:
            jsonschema.validate(instance=payload, schema=self.schema)
            return True
        except jsonschema.ValidationError as exc:
            LOGGER.warning("Import profile validation failed: %s", exc.message)
            return False

    def check_mapping(self, name: str, mapping: Dict[str, Optional[str]]) -> None:
        unknown = sorted(
            {field for field in mapping.values() if field and field not in TRADE_FIELDS}
        )
        if unknown:
            raise ValueError(
                f"Mapping '{name}' maps to unknown trade fields: {', '.join(unknown)}"
            )

    def _search_dirs(self) -> List[Tuple[str, Path]]:
        directories = [
            ("local_user", self.local_user_dir),
            ("global_user", self.global_user_dir),
        ]
        if self.env:
            directories.append(("env_presets", self.config_dir / "presets" / self.env))
        directories.append(("repo_presets", self.config_dir / "presets"))
        return directories

    def _find_profile_path(self, profile_name: str) -> Optional[Path]:
        candidate = Path(profile_name)
        if candidate.suffix == ".json" and candidate.exists():
            return candidate

        name = f"{candidate.name}.json" if candidate.suffix == "" else candidate.name
        for _, parent in self._search_dirs():
            candidate_path = parent / name
            if candidate_path.exists():
                return candidate_path
        return None

    def resolve_name(self, profile_name: Optional[str] = None) -> str:
        return (
            profile_name
            or os.environ.get("IMPORT_PROFILE_NAME")
            or self.default_profile
        )

    def load_profile(self, profile_name: Optional[str] = None) -> Dict[str, Any]:
        resolved_name = self.resolve_name(profile_name)
        if resolved_name in self.profile_cache:
            return dict(self.profile_cache[resolved_name])

        path = self._find_profile_path(resolved_name)
        if not path:
            raise FileNotFoundError(f"Import profile '{resolved_name}' not found")
        with open(path, "r", encoding="utf-8") as profile_file:
            profile = json.load(profile_file)
        if not self._validate(profile):
            raise ValueError(f"Import profile '{resolved_name}' failed schema validation")
        self.check_mapping(resolved_name, profile.get("mapping", {}))

        profile.setdefault("defaults", {})
        LOGGER.info("Loaded import profile '%s' from %s", resolved_name, path)
        self.profile_cache[resolved_name] = profile
        return dict(profile)

    def get_intervals(self, profile: Dict[str, Any]) -> Tuple[TimeInterval, ...]:
        intervals = profile.get("intervals")
        if not intervals:
            return DEFAULT_TIME_INTERVALS
        return tuple(
            TimeInterval(entry["label"], entry["start"], entry["end"]) for entry in intervals
        )

    def list_profiles(self) -> List[Dict[str, str]]:
        results: List[Dict[str, str]] = []
        seen = set()
        for source, directory in self._search_dirs():
            if not directory.exists():
                continue
            for candidate in sorted(directory.glob("*.json")):
                if candidate.stem in seen:
                    continue
                seen.add(candidate.stem)
                results.append(
                    {
                        "name": candidate.stem,
                        "source": source,
                        "path": str(candidate.resolve()),
                    }
                )
        return results

    def get_profile_path(self, profile_name: str) -> Optional[Path]:
        return self._find_profile_path(profile_name)

    def save_profile(self, profile_data: Dict[str, Any], profile_name: str) -> Path:
        if not self._validate(profile_data):
            raise ValueError(f"Import profile '{profile_name}' failed schema validation")
        self.check_mapping(profile_name, profile_data.get("mapping", {}))

        target = self.local_user_dir / f"{profile_name}.json"
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as output:
            json.dump(profile_data, output, indent=2)
        self.profile_cache.pop(profile_name, None)
        return target

    def create_profile_copy(self, source_name: str, target_name: str) -> Path:
        target_path = self.local_user_dir / f"{target_name}.json"
        if target_path.exists():
            raise FileExistsError(f"Target profile '{target_name}' already exists")
        profile = self.load_profile(source_name)
        profile["id"] = target_name
        return self.save_profile(profile, target_name)
