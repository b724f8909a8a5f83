"""CHIP-8 instruction handlers, grouped by family.

Every handler takes ``(cpu, bus, instruction)`` and returns
``(cpu, bus, directive)``.
"""
