from .step_20_install_packages import InstallPackagesStep
from .step_30_install_font import InstallFontStep
from .step_40_install_prompt import InstallPromptStep
from .step_50_install_lister import InstallListerStep
from .step_60_configure_shell import ConfigureShellStep
from .step_70_post_install_guidance import PostInstallGuidanceStep

__all__ = [
    "InstallPackagesStep",
    "InstallFontStep",
    "InstallPromptStep",
    "InstallListerStep",
    "ConfigureShellStep",
    "PostInstallGuidanceStep",
]
