"""Ready-made error mappings for PostgreSQL and request validation errors."""