"""
API Blueprints for the warehouse planner

Each module defines a Flask Blueprint for a specific feature area:
- capacity: Floor capacity preview and saved floor layouts
- pricing: Pallet and area-rental quotes
- availability: Date-window availability checks
"""
