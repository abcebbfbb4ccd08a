from .discover_modules import discover_modules
from .lazy_module import LazyModule
from .module_manager import module_manager
