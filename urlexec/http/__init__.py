"""Request execution: method factory, proxy exclusion and URL credentials."""
