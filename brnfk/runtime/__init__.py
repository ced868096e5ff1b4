"""
brnfk runtime: load and run Brainfuck programs.

| Layer                    | Purpose                                      |
<------------------------- + -------------------------------------------- >
| **Loader**               | Bytes → linked instruction list (`Program`)  |
| **Tape**                 | Zero-default, right-growing byte memory      |
| **TapeVM**               | Instruction/data pointer interpreter         |
| **Capabilities**         | Pluggable byte input and output              |
| **Analysis**             | Loop nesting graph, listing, hashing         |
"""

from . import core as _core
from . import errors as _errors
from . import loader as _loader
from . import capabilities as _capabilities
from . import engine as _engine
from . import analysis as _analysis
from .cli import main, parse_args, run_repl

from .core import *
from .errors import *
from .loader import *
from .capabilities import *
from .engine import *
from .analysis import *

__all__ = []
for module in (_core, _errors, _loader, _capabilities, _engine, _analysis):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args', 'run_repl']
__all__ = list(dict.fromkeys(__all__))
