from __future__ import annotations

from .step_70_customize_os import CustomizerStep


class CustomizeDockStep(CustomizerStep):
    step_id = "80_customize_dock"
    kind = "dock"
    title = "Dock"
    effect = "your macOS dock by removing and adding applications"
