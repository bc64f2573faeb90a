"""Quota SQL query constants.

All queries are parameterized by schema and formatted with
``query.format(schema=...)`` by the repositories.
"""

# Schema DDL
QUOTA_SCHEMA_DDL = """
    CREATE SCHEMA IF NOT EXISTS {schema};

    CREATE TABLE IF NOT EXISTS {schema}.quota_types (
        name VARCHAR(100) PRIMARY KEY,
        description TEXT NOT NULL DEFAULT '',
        default_limit BIGINT CHECK (default_limit IS NULL OR default_limit >= 0),
        is_time_windowed BOOLEAN NOT NULL DEFAULT false,
        window_seconds INTEGER CHECK (window_seconds IS NULL OR window_seconds > 0),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CHECK (NOT is_time_windowed OR window_seconds IS NOT NULL)
    );

    CREATE TABLE IF NOT EXISTS {schema}.quota_limits (
        id BIGSERIAL PRIMARY KEY,
        organization_id VARCHAR(255) NOT NULL,
        quota_type VARCHAR(100) NOT NULL REFERENCES {schema}.quota_types(name),
        limit_value BIGINT CHECK (limit_value IS NULL OR limit_value >= 0),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        UNIQUE (organization_id, quota_type)
    );

    CREATE TABLE IF NOT EXISTS {schema}.quota_usage (
        id BIGSERIAL PRIMARY KEY,
        organization_id VARCHAR(255) NOT NULL,
        quota_type VARCHAR(100) NOT NULL REFERENCES {schema}.quota_types(name),
        current_usage BIGINT NOT NULL DEFAULT 0 CHECK (current_usage >= 0),
        period_start TIMESTAMPTZ,
        period_end TIMESTAMPTZ,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        UNIQUE (organization_id, quota_type)
    );

    CREATE INDEX IF NOT EXISTS idx_quota_usage_organization
        ON {schema}.quota_usage (organization_id);
"""

# Quota type queries
QUOTA_TYPE_LIST_ALL = """
    SELECT name, description, default_limit, is_time_windowed, window_seconds
    FROM {schema}.quota_types
    ORDER BY name
"""

QUOTA_TYPE_GET_BY_NAME = """
    SELECT name, description, default_limit, is_time_windowed, window_seconds
    FROM {schema}.quota_types
    WHERE name = $1
"""

QUOTA_TYPE_UPSERT = """
    INSERT INTO {schema}.quota_types (
        name, description, default_limit, is_time_windowed, window_seconds
    ) VALUES ($1, $2, $3, $4, $5)
    ON CONFLICT (name) DO UPDATE SET
        description = EXCLUDED.description,
        default_limit = EXCLUDED.default_limit,
        is_time_windowed = EXCLUDED.is_time_windowed,
        window_seconds = EXCLUDED.window_seconds,
        updated_at = NOW()
    RETURNING name, description, default_limit, is_time_windowed, window_seconds
"""

# Quota limit queries
QUOTA_LIMIT_GET = """
    SELECT organization_id, quota_type, limit_value, updated_at
    FROM {schema}.quota_limits
    WHERE organization_id = $1 AND quota_type = $2
"""

QUOTA_LIMIT_LIST_BY_ORGANIZATION = """
    SELECT organization_id, quota_type, limit_value, updated_at
    FROM {schema}.quota_limits
    WHERE organization_id = $1
    ORDER BY quota_type
"""

QUOTA_LIMIT_UPSERT = """
    INSERT INTO {schema}.quota_limits (
        organization_id, quota_type, limit_value, updated_at
    ) VALUES ($1, $2, $3, $4)
    ON CONFLICT (organization_id, quota_type) DO UPDATE SET
        limit_value = EXCLUDED.limit_value,
        updated_at = EXCLUDED.updated_at
    RETURNING organization_id, quota_type, limit_value, updated_at
"""

# Usage queries
# Transaction-scoped lock on 'organization_id:quota_type'; held until commit
# or rollback and taken whether or not the usage row exists yet.
USAGE_ADVISORY_LOCK = """
    SELECT pg_advisory_xact_lock(hashtextextended($1, 0))
"""

USAGE_GET = """
    SELECT organization_id, quota_type, current_usage, period_start, period_end, updated_at
    FROM {schema}.quota_usage
    WHERE organization_id = $1 AND quota_type = $2
"""

USAGE_LIST_BY_ORGANIZATION = """
    SELECT organization_id, quota_type, current_usage, period_start, period_end, updated_at
    FROM {schema}.quota_usage
    WHERE organization_id = $1
    ORDER BY quota_type
"""

USAGE_UPSERT = """
    INSERT INTO {schema}.quota_usage (
        organization_id, quota_type, current_usage, period_start, period_end, updated_at
    ) VALUES ($1, $2, $3, $4, $5, $6)
    ON CONFLICT (organization_id, quota_type) DO UPDATE SET
        current_usage = EXCLUDED.current_usage,
        period_start = EXCLUDED.period_start,
        period_end = EXCLUDED.period_end,
        updated_at = EXCLUDED.updated_at
"""
