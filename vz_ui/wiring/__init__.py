from vz_ui.wiring.dependencies import UIContext, build_dispatcher

__all__ = ["UIContext", "build_dispatcher"]
