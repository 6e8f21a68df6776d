"""
Static Model Registry.

Loads the table of supported (model, engine, mode) combinations and the
extension package that provides each one, if any. The table is read once
into an immutable ``ModelRegistry`` and shared read-only afterwards.

Usage
-----
    from modelspec.registry import get_model_registry

    registry = get_model_registry()

    # Rows built into modelspec (no extension package needed)
    registry.filter(model='linear_reg', has_pkg=False)

    # Rows provided by extension packages
    registry.filter(model='proportional_hazards', has_pkg=True)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Optional

import pandas as pd

from .config import MODEL_INFO_COLUMNS, MODEL_INFO_DELIMITER, MODEL_INFO_FILE
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """
    One supported combination of model type, engine and mode.

    Attributes
    ----------
    model : str
        Model type (e.g., 'linear_reg')
    engine : str
        Engine name (e.g., 'glmnet')
    mode : str
        Model mode (e.g., 'regression')
    pkg : str, optional
        Extension package that supplies the implementation, or None when
        the combination is built in
    """

    model: str
    engine: str
    mode: str
    pkg: Optional[str] = None

    @property
    def requires_package(self) -> bool:
        return self.pkg is not None


class ModelRegistry:
    """Immutable collection of ``RegistryEntry`` rows."""

    def __init__(self, entries: Iterable[RegistryEntry]):
        self._entries = tuple(entries)

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item) -> bool:
        return item in self._entries

    @property
    def entries(self) -> tuple[RegistryEntry, ...]:
        return self._entries

    def filter(
        self,
        model: Optional[str] = None,
        engine: Optional[str] = None,
        modes: Optional[Iterable[str]] = None,
        has_pkg: Optional[bool] = None,
    ) -> tuple[RegistryEntry, ...]:
        """
        Return the rows matching every given condition.

        Parameters
        ----------
        model : str, optional
            Model type to match
        engine : str, optional
            Engine to match
        modes : iterable of str, optional
            Accepted modes
        has_pkg : bool, optional
            True for extension rows only, False for built-in rows only
        """
        if isinstance(modes, str):
            modes = (modes,)
        mode_set = set(modes) if modes is not None else None

        out = []
        for entry in self._entries:
            if model is not None and entry.model != model:
                continue
            if engine is not None and entry.engine != engine:
                continue
            if mode_set is not None and entry.mode not in mode_set:
                continue
            if has_pkg is not None and entry.requires_package != has_pkg:
                continue
            out.append(entry)
        return tuple(out)

    def models(self) -> list[str]:
        return sorted({e.model for e in self._entries})

    def engines(self, model: str) -> list[str]:
        return sorted({e.engine for e in self._entries if e.model == model})

    def to_frame(self) -> pd.DataFrame:
        """Return the registry as a DataFrame (a copy)."""
        return pd.DataFrame(
            [(e.model, e.engine, e.mode, e.pkg) for e in self._entries],
            columns=list(MODEL_INFO_COLUMNS),
        )


def load_model_info(path: Optional[Path] = None) -> ModelRegistry:
    """
    Load the model info table from a delimited file.

    Parameters
    ----------
    path : Path, optional
        Path to the table. Defaults to MODEL_INFO_FILE from config.

    Returns
    -------
    ModelRegistry
        Immutable registry

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ConfigurationError
        If the table is missing required columns
    """
    if path is None:
        path = MODEL_INFO_FILE
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Model info table not found: {path}")

    df = pd.read_csv(path, sep=MODEL_INFO_DELIMITER, dtype=str)
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in MODEL_INFO_COLUMNS if c not in df.columns]
    if missing:
        raise ConfigurationError(
            f"Model info table {path.name} is missing columns: {', '.join(missing)}"
        )

    df = df[list(MODEL_INFO_COLUMNS)].copy()
    for col in ('model', 'engine', 'mode'):
        df[col] = df[col].str.strip()
    df['pkg'] = df['pkg'].str.strip()

    entries = [
        RegistryEntry(
            model=row.model,
            engine=row.engine,
            mode=row.mode,
            pkg=row.pkg if isinstance(row.pkg, str) and row.pkg else None,
        )
        for row in df.itertuples(index=False)
    ]
    logger.debug("Loaded %d registry rows from %s", len(entries), path)
    return ModelRegistry(entries)


@lru_cache(maxsize=None)
def get_model_registry() -> ModelRegistry:
    """Process-wide registry, loaded on first use."""
    return load_model_info()
