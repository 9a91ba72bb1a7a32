"""
Default QC thresholds.
"""
QC_THRESHOLDS = {
    "curve": {
        "endpoint_tolerance": 1e-9,  # |f(0)| and |f(1) - 1|
        "monotonic_tolerance": 1e-12,  # Largest allowed step down between samples
    },
    "windows": {
        "min_pixels": 1,  # Narrowest drawable window
    },
}
