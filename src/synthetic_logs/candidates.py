"""
Candidate Names

Static configuration data the generators pick names from.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Candidates:
    """Name lists used when building a batch."""
    device_names: Tuple[str, ...] = ('myDevice1', 'myDevice2', 'myDevice3')
    endpoint_names: Tuple[str, ...] = ('myEndpoint1', 'myEndpoint2', 'myEndpoint3')
    # Parallel lists: index i of one pairs with index i of the other
    third_party_service_names: Tuple[str, ...] = (
        'myThirdPartyService1', 'myThirdPartyService2', 'myThirdPartyService3'
    )
    third_party_endpoint_names: Tuple[str, ...] = (
        'myThirdPartyEndpoint1', 'myThirdPartyEndpoint2', 'myThirdPartyEndpoint3'
    )

    def __post_init__(self):
        for name in ('device_names', 'endpoint_names',
                     'third_party_service_names', 'third_party_endpoint_names'):
            values = tuple(getattr(self, name))
            if not values:
                raise ValueError(f"{name} must not be empty")
            object.__setattr__(self, name, values)

        if len(self.third_party_service_names) != len(self.third_party_endpoint_names):
            raise ValueError("third_party_service_names and third_party_endpoint_names "
                             "must have the same length")

    def third_party_pair(self, index: int) -> Tuple[str, str]:
        """Get the (service_name, endpoint_name) pair at index."""
        return self.third_party_service_names[index], self.third_party_endpoint_names[index]

    def summary(self) -> List[str]:
        """Human-readable listing of all candidate names."""
        lines = [f"Devices: {', '.join(self.device_names)}",
                 f"Endpoints: {', '.join(self.endpoint_names)}",
                 "Third-party services:"]
        for service, endpoint in zip(self.third_party_service_names, self.third_party_endpoint_names):
            lines.append(f"  {service} -> {endpoint}")
        return lines


DEFAULT_CANDIDATES = Candidates()
