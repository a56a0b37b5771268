import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

logger = logging.getLogger(__name__)


class Match:
    """One result of a pattern search, binding role labels to elements."""

    def __init__(self, bindings: Mapping[str, Any]) -> None:
        self.bindings = dict(bindings)

    def get(self, label: str) -> Optional[Any]:
        return self.bindings.get(label)

    def get_all(self, labels: Iterable[str]) -> List[Any]:
        """Elements bound to the given labels, in label order."""
        return [self.bindings[label] for label in labels
                if self.bindings.get(label) is not None]

    def __repr__(self) -> str:
        return f"Match({sorted(self.bindings)})"


class Blacklist:
    """Ubiquitous small molecules that pattern searches should not traverse.

    Each entry has a ubiquity score and an optional context in which the
    molecule is ubiquitous ('I' for inputs, 'O' for outputs, empty for both).
    """

    def __init__(self, entries: Optional[Mapping[str, Tuple[int, str]]] = None) -> None:
        self.entries: Dict[str, Tuple[int, str]] = dict(entries or {})

    def __contains__(self, element_id: str) -> bool:
        return element_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get_score(self, element_id: str) -> int:
        return self.entries.get(element_id, (0, ""))[0]

    def get_context(self, element_id: str) -> Optional[str]:
        entry = self.entries.get(element_id)
        return entry[1] if entry else None

    @property
    def ids(self) -> Set[str]:
        return set(self.entries)


def load_blacklist(file_path: Union[str, Path]) -> Blacklist:
    """Read a Pathway Commons blacklist file (id, score and context per line)."""
    entries = {}
    with open(file_path, encoding="utf-8") as f:
        for line_num, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            parts = line.split("\t")
            if len(parts) < 2:
                raise ValueError(f"Invalid blacklist line {line_num}: {line}")
            context = parts[2] if len(parts) > 2 else ""
            entries[parts[0]] = (int(parts[1]), context)
    logger.info(f"Loaded {len(entries)} blacklisted molecules from {file_path}")
    return Blacklist(entries)


class PatternSpec:
    """The pattern a miner asks the searcher for."""

    def __init__(self, name: str, blacklist: Optional[Blacklist] = None) -> None:
        self.name = name
        self.blacklist = blacklist

    def __eq__(self, other: Any) -> bool:
        return (isinstance(other, PatternSpec) and
                (self.name, self.blacklist) == (other.name, other.blacklist))

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"PatternSpec({self.name!r})"


class PatternSearcher(ABC):
    """Searches a pathway model for the matches of a pattern."""

    @abstractmethod
    def search(self, model: Any, pattern: PatternSpec) -> Dict[Any, List[Match]]:
        pass


class ElementReader(ABC):
    """Reads the properties the miners need from bound graph elements."""

    @abstractmethod
    def grounding_ids(self, entity_reference: Any) -> Set[str]:
        pass

    @abstractmethod
    def modifications(self, simple_pe: Any, complex_pe: Any) -> Set[str]:
        pass

    @abstractmethod
    def cellular_locations(self, simple_pe: Any, complex_pe: Any) -> Set[str]:
        pass

    @abstractmethod
    def control_sign(self, control: Any) -> int:
        pass

    @abstractmethod
    def is_labeled_inactive(self, simple_pe: Any, complex_pe: Any) -> bool:
        pass

    @abstractmethod
    def element_id(self, element: Any) -> str:
        pass
