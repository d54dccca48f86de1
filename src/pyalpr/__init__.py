"""pyalpr - Directional automatic licence plate reader scan pipeline."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyalpr")
except PackageNotFoundError:
    __version__ = "0+local"
from pyalpr.alerts import AlertMarker, AlertSink
from pyalpr.config import AlprConfig
from pyalpr.context import ScanContext, ScanState
from pyalpr.events import (
    AlertEvent,
    HitNotification,
    MarkerCreated,
    MarkerRemoved,
    NoticeKind,
    RemovalReason,
    StatusNotice,
)
from pyalpr.exceptions import (
    AlprConfigError,
    AlprError,
    AlprLookupError,
    AlprRegistryError,
    AlprTransportError,
)
from pyalpr.geometry import Vec3
from pyalpr.models import (
    AlertCode,
    AlprStatus,
    DisplayColor,
    LicenseStatus,
    OwnerRecord,
    RegistryRecord,
    ScanResult,
    SeverityTier,
    VehicleRecord,
)
from pyalpr.registry import (
    AsyncLookupClient,
    HttpRegistry,
    InMemoryRegistry,
    LookupClient,
    SqliteRegistry,
)
from pyalpr.resolver import resolve
from pyalpr.runner import run, start_scanner
from pyalpr.scanner import ScanLoop, is_qualifying
from pyalpr.selector import DirectionalTargets, Target, select_targets
from pyalpr.world import Observer, SimWorld, VehicleHandle, VehicleSnapshot, World

__all__ = [
    "__version__",
    "AlertCode",
    "AlertEvent",
    "AlertMarker",
    "AlertSink",
    "AlprConfig",
    "AlprConfigError",
    "AlprError",
    "AlprLookupError",
    "AlprRegistryError",
    "AlprStatus",
    "AlprTransportError",
    "AsyncLookupClient",
    "DirectionalTargets",
    "DisplayColor",
    "HitNotification",
    "HttpRegistry",
    "InMemoryRegistry",
    "LicenseStatus",
    "LookupClient",
    "MarkerCreated",
    "MarkerRemoved",
    "NoticeKind",
    "Observer",
    "OwnerRecord",
    "RegistryRecord",
    "RemovalReason",
    "ScanContext",
    "ScanLoop",
    "ScanResult",
    "ScanState",
    "SeverityTier",
    "SimWorld",
    "SqliteRegistry",
    "StatusNotice",
    "Target",
    "Vec3",
    "VehicleHandle",
    "VehicleRecord",
    "VehicleSnapshot",
    "World",
    "is_qualifying",
    "resolve",
    "run",
    "select_targets",
    "start_scanner",
]
