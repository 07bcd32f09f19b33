"""Options that steer a single parse."""

from __future__ import annotations

from dataclasses import dataclass, field

from hoconkit.errors import InclusionCycle


@dataclass
class ConfigParseOptions:
    """Parse settings plus how often each inclusion has been seen."""

    max_include_depth: int = 50
    includes: dict[str, int] = field(default_factory=dict)

    def register_include(self, path: str) -> int:
        """Count one more inclusion of ``path``; raise on a cycle.

        Returns how often ``path`` has now been included.
        """
        if path in self.includes:
            self.includes[path] += 1
            if self.includes[path] > self.max_include_depth:
                raise InclusionCycle(path)
        else:
            self.includes[path] = 1
        return self.includes[path]