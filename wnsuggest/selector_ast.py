"""Value objects produced by the selector parser."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class SpanSelector:
    """Selects input spans by type, optionally requiring a feature or a feature value."""

    type_name: str
    feature: Optional[str] = None
    value: Optional[str] = None

    @property
    def constraints(self) -> Optional[Dict[str, str]]:
        """Feature values a selected span must carry."""
        if self.feature is not None and self.value is not None:
            return {self.feature: self.value}
        return None

    @property
    def required_features(self) -> Tuple[str, ...]:
        """Feature names a selected span must carry."""
        if self.feature is not None and self.value is None:
            return (self.feature,)
        return ()


@dataclass(frozen=True)
class OutputTarget:
    """Type of the spans created per sense, with an optional fixed discriminator feature."""

    type_name: str
    feature: Optional[str] = None
    value: Optional[str] = None

    def discriminator(self) -> Dict[str, str]:
        if self.feature is not None and self.value is not None:
            return {self.feature: self.value}
        return {}
