CREATE_EVENTS = """
CREATE TABLE IF NOT EXISTS events (
    id SERIAL PRIMARY KEY,
    organizer_id BIGINT NOT NULL,
    title VARCHAR(255) NOT NULL,
    description TEXT NOT NULL,
    category_id VARCHAR(64),
    thumbnail_url TEXT,
    is_online BOOLEAN NOT NULL DEFAULT FALSE,
    is_private BOOLEAN NOT NULL DEFAULT FALSE,
    location_name VARCHAR(255),
    start_datetime TIMESTAMP WITHOUT TIME ZONE NOT NULL,
    end_datetime TIMESTAMP WITHOUT TIME ZONE NOT NULL,
    capacity INTEGER,
    status VARCHAR(32) NOT NULL DEFAULT 'published',
    created_at TIMESTAMP WITHOUT TIME ZONE NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMP WITHOUT TIME ZONE NOT NULL DEFAULT NOW()
);
"""

CREATE_TICKET_TIERS = """
CREATE TABLE IF NOT EXISTS ticket_tiers (
    id SERIAL PRIMARY KEY,
    event_id INTEGER NOT NULL REFERENCES events(id) ON DELETE CASCADE,
    name VARCHAR(255) NOT NULL,
    price DECIMAL(10, 2) NOT NULL DEFAULT 0,
    currency VARCHAR(8) NOT NULL DEFAULT 'KES',
    quantity_total INTEGER NOT NULL,
    description TEXT,
    sales_start_at TIMESTAMP WITHOUT TIME ZONE,
    sales_end_at TIMESTAMP WITHOUT TIME ZONE,
    max_per_user INTEGER,
    position INTEGER NOT NULL DEFAULT 0
);
"""

CREATE_EVENT_TAGS = """
CREATE TABLE IF NOT EXISTS event_tags (
    event_id INTEGER NOT NULL REFERENCES events(id) ON DELETE CASCADE,
    tag VARCHAR(64) NOT NULL,
    position INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (event_id, tag)
);
"""

CREATE_EVENT_DRAFTS = """
CREATE TABLE IF NOT EXISTS event_drafts (
    slot_key VARCHAR(255) PRIMARY KEY,
    payload TEXT NOT NULL,
    updated_at TIMESTAMP WITHOUT TIME ZONE NOT NULL DEFAULT NOW()
);
"""

CREATE_INDEX_TICKET_TIERS_EVENT = """
CREATE INDEX IF NOT EXISTS idx_ticket_tiers_event_id ON ticket_tiers(event_id);
"""

CREATE_INDEX_EVENTS_ORGANIZER = """
CREATE INDEX IF NOT EXISTS idx_events_organizer_id ON events(organizer_id);
"""

STATEMENTS = (
    CREATE_EVENTS,
    CREATE_TICKET_TIERS,
    CREATE_EVENT_TAGS,
    CREATE_EVENT_DRAFTS,
    CREATE_INDEX_TICKET_TIERS_EVENT,
    CREATE_INDEX_EVENTS_ORGANIZER,
)
