from __future__ import annotations

from .step_03_enable_wsl_feature import EnableFeatureStep


class EnableVmPlatformStep(EnableFeatureStep):
    step_id = "04_enable_vm_platform"
    feature_attr = "hypervisor_feature"
