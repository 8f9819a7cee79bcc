"""
This package contains all modules related to parsing and decoding data
broadcast by SensorBug beacons.

Sub-packages handle specific data formats:

- ``advert``: Manufacturer-data header validation, record decoding and summaries.
"""
