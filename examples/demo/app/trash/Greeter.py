raise RuntimeError("trash/ is ignored and must never be loaded")
