"""
Record Generators

Record model, batch envelope, and one generator per operation kind.
Every generator is a pure function of its inputs, the pseudo-random
generator and the current time.
"""

import json
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List

RESOURCE_ID = ("/SUBSCRIPTIONS/FAAB228D-DF7A-4086-991E-E81C4659D41A/RESOURCEGROUPS/RENTU-E2E-DEV"
               "/PROVIDERS/MICROSOFT.DEVICES/IOTHUBS/RENTU-E2E-DEV-IOTHUB")

D2C_OPERATION = 'DiagnosticIoTHubD2C'
INGRESS_OPERATION = 'DiagnosticIoTHubIngress'
EGRESS_OPERATION = 'DiagnosticIoTHubEgress'
THIRD_PARTY_D2C_OPERATION = 'ThirdPartyServiceD2CLog'
THIRD_PARTY_INGRESS_OPERATION = 'ThirdPartyServiceIngressLog'

OPERATION_NAMES = (
    D2C_OPERATION,
    INGRESS_OPERATION,
    EGRESS_OPERATION,
    THIRD_PARTY_D2C_OPERATION,
    THIRD_PARTY_INGRESS_OPERATION,
)

LEVEL_INFORMATION = 'Information'
LEVEL_ERROR = 'Error'

MESSAGE_SIZE = '1000'
ENDPOINT_TYPE = 'EventHub'

# randrange(ERROR_ODDS) == ERROR_ROLL_HIT -> 1 in 1000 records is an error
ERROR_ODDS = 1000
ERROR_ROLL_HIT = 100

DURATION_RANGE_MS = (1, 1000)
CALLEE_OFFSET_RANGE_MS = (500, 1000)

JSON_SEPARATORS = (',', ':')


def format_timestamp(moment: datetime) -> str:
    """Format a UTC datetime as yyyy-MM-ddTHH:mm:ss.fffZ."""
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def encode_properties(properties: Dict[str, str]) -> str:
    """Serialize a properties object to the string embedded in a record."""
    return json.dumps(properties, separators=JSON_SEPARATORS)


@dataclass(frozen=True)
class Record:
    """One diagnostic log entry."""
    time: str
    operation_name: str
    duration_ms: str
    correlation_id: str
    properties: str
    level: str = LEVEL_INFORMATION
    resource_id: str = RESOURCE_ID

    def to_dict(self) -> Dict[str, str]:
        """Wire representation, keys in wire order."""
        return {
            "time": self.time,
            "resourceId": self.resource_id,
            "operationName": self.operation_name,
            "durationMs": self.duration_ms,
            "correlationId": self.correlation_id,
            "properties": self.properties,
            "level": self.level
        }

    @property
    def properties_dict(self) -> Dict[str, str]:
        return json.loads(self.properties)


@dataclass
class BatchEnvelope:
    """Ordered records sent as the payload of one bus message."""
    records: List[Record] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {"records": [record.to_dict() for record in self.records]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=JSON_SEPARATORS)

    def to_bytes(self) -> bytes:
        return self.to_json().encode('utf-8')

    def __len__(self) -> int:
        return len(self.records)


def _roll_level(rng: random.Random) -> str:
    if rng.randrange(ERROR_ODDS) == ERROR_ROLL_HIT:
        return LEVEL_ERROR
    return LEVEL_INFORMATION


def _random_duration(rng: random.Random) -> str:
    return str(rng.randrange(*DURATION_RANGE_MS))


def _caller_callee_times(rng: random.Random, now: datetime):
    offset_ms = rng.randrange(*CALLEE_OFFSET_RANGE_MS)
    callee = now + timedelta(milliseconds=offset_ms)
    return format_timestamp(now), format_timestamp(callee)


def generate_d2c_record(correlation_id: str, device_name: str,
                        rng: random.Random, now: datetime) -> Record:
    """
    Generate a device-to-cloud record.

    The callee timestamp trails the caller timestamp by 500-999 ms.
    """
    caller_time, callee_time = _caller_callee_times(rng, now)
    properties = {
        "messageSize": MESSAGE_SIZE,
        "deviceId": device_name,
        "callerLocalTimeUtc": caller_time,
        "calleeLocalTimeUtc": callee_time
    }
    return Record(
        time=format_timestamp(now),
        operation_name=D2C_OPERATION,
        duration_ms="",
        correlation_id=correlation_id,
        properties=encode_properties(properties),
        level=_roll_level(rng)
    )


def generate_ingress_record(correlation_id: str, parent_span_id: str,
                            rng: random.Random, now: datetime) -> Record:
    """Generate an ingress record pointing at the D2C hop."""
    duration_ms = _random_duration(rng)
    properties = {
        "isRoutingEnabled": "true",
        "parentSpanId": parent_span_id
    }
    return Record(
        time=format_timestamp(now),
        operation_name=INGRESS_OPERATION,
        duration_ms=duration_ms,
        correlation_id=correlation_id,
        properties=encode_properties(properties),
        level=_roll_level(rng)
    )


def generate_egress_record(correlation_id: str, parent_span_id: str, endpoint_name: str,
                           rng: random.Random, now: datetime) -> Record:
    """Generate an egress record pointing at the ingress hop."""
    duration_ms = _random_duration(rng)
    properties = {
        "endpointType": ENDPOINT_TYPE,
        "endpointName": endpoint_name,
        "parentSpanId": parent_span_id
    }
    return Record(
        time=format_timestamp(now),
        operation_name=EGRESS_OPERATION,
        duration_ms=duration_ms,
        correlation_id=correlation_id,
        properties=encode_properties(properties),
        level=_roll_level(rng)
    )


def generate_third_party_d2c_record(correlation_id: str, device_name: str, service_name: str,
                                    rng: random.Random, now: datetime) -> Record:
    """Generate a device-to-cloud record for a third-party service hop."""
    caller_time, callee_time = _caller_callee_times(rng, now)
    properties = {
        "messageSize": MESSAGE_SIZE,
        "deviceId": device_name,
        "thirdPartyServiceName": service_name,
        "callerLocalTimeUtc": caller_time,
        "calleeLocalTimeUtc": callee_time
    }
    return Record(
        time=format_timestamp(now),
        operation_name=THIRD_PARTY_D2C_OPERATION,
        duration_ms="",
        correlation_id=correlation_id,
        properties=encode_properties(properties),
        level=_roll_level(rng)
    )


def generate_third_party_ingress_record(correlation_id: str, parent_span_id: str,
                                        service_name: str, endpoint_name: str,
                                        rng: random.Random, now: datetime) -> Record:
    """Generate an ingress record for a third-party service hop."""
    duration_ms = _random_duration(rng)
    properties = {
        "isRoutingEnabled": "true",
        "thirdPartyServiceName": service_name,
        "endpointName": endpoint_name,
        "parentSpanId": parent_span_id
    }
    return Record(
        time=format_timestamp(now),
        operation_name=THIRD_PARTY_INGRESS_OPERATION,
        duration_ms=duration_ms,
        correlation_id=correlation_id,
        properties=encode_properties(properties),
        level=_roll_level(rng)
    )
