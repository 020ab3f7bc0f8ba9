"""
Application Layer for the Training Progression API.

This package contains:
- ports/: Abstract repository interfaces (what the application needs)
- use_cases/: Workflows that combine the progression engine with ports
"""
