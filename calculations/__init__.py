"""
Calculation modules for pressure vessel inspection per ASME VIII-1, API 510 and API 579-1

This package contains:
- calcs_geometry: Head shape factors and external pressure chart factors
- calcs_thickness: Minimum required thickness, MAWP, external pressure, hydrotest
- calcs_corrosion: Corrosion rate, remaining life, inspection interval, status
- calcs_nozzle: Nozzle neck thickness (UG-27 / UG-45)
- calcs_ffs: Level 1 fitness-for-service screening
- calcs_in_lieu_of: In-lieu-of internal inspection qualification
- component: Per-component evaluation combining the above
"""
