"""
Solver Module
=============

Bounded Context for SAP Materials Management ticket analysis.

Responsibilities:
- Extract SAP MM signals (keywords, document numbers, priority, module) from ticket text
- Classify the ticket against a static scenario knowledge base
- Assemble a troubleshooting plan (root cause, steps, validations, prevention)

The analysis is deterministic and side-effect free; the same text always
produces the same plan.
"""

__version__ = "1.0.0"
