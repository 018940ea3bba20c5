# cyclewatch/core/__init__.py
# Pure timing core: accumulator, cycle state machines, scheduler & session types (no I/O)
