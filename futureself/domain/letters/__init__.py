"""
Letters bounded context: domain layer.

This module contains all domain logic for the letters context:
- Letter, goal and reflection entities
- Delivery scheduling (the one-week minimum)
- Goal status lifecycle and carry-forward
"""
