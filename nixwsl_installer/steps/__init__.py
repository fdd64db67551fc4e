from .step_01_check_network import CheckNetworkStep
from .step_02_check_virtualization import CheckVirtualizationStep
from .step_03_enable_wsl_feature import EnableWslFeatureStep
from .step_04_enable_vm_platform import EnableVmPlatformStep
from .step_05_set_default_version import SetDefaultVersionStep
from .step_06_patch_wslconfig import PatchWslConfigStep
from .step_07_ensure_wsl_runtime import EnsureWslRuntimeStep
from .step_08_unregister_existing import UnregisterExistingStep
from .step_09_download_image import DownloadImageStep
from .step_10_sync_config_repo import SyncConfigRepoStep
from .step_11_import_distribution import ImportDistributionStep
from .step_12_set_default_distribution import SetDefaultDistributionStep
from .step_13_materialize_staged_config import MaterializeStagedConfigStep
from .step_14_rebuild_bootstrap import RebuildBootstrapStep
from .step_15_shutdown_wsl import ShutdownWslStep
from .step_16_materialize_guest_config import MaterializeGuestConfigStep
from .step_17_rebuild_from_guest_clone import RebuildFromGuestCloneStep
from .step_18_finalize_guest_user import FinalizeGuestUserStep
from .step_19_refresh_guest_clone import RefreshGuestCloneStep
from .step_20_rebuild_final import RebuildFinalStep

__all__ = [
    "CheckNetworkStep",
    "CheckVirtualizationStep",
    "EnableWslFeatureStep",
    "EnableVmPlatformStep",
    "SetDefaultVersionStep",
    "PatchWslConfigStep",
    "EnsureWslRuntimeStep",
    "UnregisterExistingStep",
    "DownloadImageStep",
    "SyncConfigRepoStep",
    "ImportDistributionStep",
    "SetDefaultDistributionStep",
    "MaterializeStagedConfigStep",
    "RebuildBootstrapStep",
    "ShutdownWslStep",
    "MaterializeGuestConfigStep",
    "RebuildFromGuestCloneStep",
    "FinalizeGuestUserStep",
    "RefreshGuestCloneStep",
    "RebuildFinalStep",
]
