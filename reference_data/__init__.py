"""
Reference data for pressure vessel inspection calculations

This package contains:
- asme_b36_10: ASME B36.10M pipe schedule table for nozzles
- material_stress: ASME II-D allowable stress table and lookup
- material_stress.json: Allowable stress data (Table 1A subset)
- external_pressure_charts: Factor A / Factor B chart points
- input_data.json: Sample vessel for the batch runner
"""
