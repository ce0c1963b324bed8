"""
Tyto Backend Test Suite

Test structure:
- unit/: Test components in isolation with fake collaborators
- integration/: Full sync pipeline runs, including a real git repository
- mocks/: Fake fetch and render collaborators
"""
