from .step_10_probe_tools import ProbeToolsStep
from .step_20_discover_packages import DiscoverPackagesStep
from .step_30_resolve_mode import ResolveModeStep
from .step_40_detect_conflicts import DetectConflictsStep
from .step_50_install_symlinks import InstallSymlinksStep
from .step_55_configure_env import ConfigureEnvStep
from .step_60_install_dependencies import InstallDependenciesStep
from .step_70_customize_os import CustomizeOSStep
from .step_80_customize_dock import CustomizeDockStep
from .step_90_summary import SummaryStep

__all__ = [
    "ProbeToolsStep",
    "DiscoverPackagesStep",
    "ResolveModeStep",
    "DetectConflictsStep",
    "InstallSymlinksStep",
    "ConfigureEnvStep",
    "InstallDependenciesStep",
    "CustomizeOSStep",
    "CustomizeDockStep",
    "SummaryStep",
]
