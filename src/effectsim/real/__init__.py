from .interpreter import RealEnv, RealInterpreter, RealIO

__all__ = ["RealEnv", "RealIO", "RealInterpreter"]
