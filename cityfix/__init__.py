"""CityFix backend: citizen issue reports, their status workflow and statistics."""
