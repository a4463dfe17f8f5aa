"""Database schema DDL for the events table."""

EVENTS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS events (
  job_id           VARCHAR(36) PRIMARY KEY,
  event_id         VARCHAR(255) NOT NULL,
  payload          TEXT,
  event_timestamp  BIGINT,

  status           VARCHAR(50) NOT NULL CHECK (status IN ('processing', 'done')),

  created_at       TIMESTAMP NOT NULL DEFAULT NOW(),
  updated_at       TIMESTAMP NOT NULL DEFAULT NOW()
);
"""
