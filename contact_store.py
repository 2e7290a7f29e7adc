from datetime import datetime, timezone


def _now():
    # same text layout as the Contact column defaults in db_setup
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def find_contacts(conn, email: str = None, phone: str = None):
    cursor = conn.execute("""
        SELECT * FROM Contact
        WHERE email = ? OR phoneNumber = ?
        ORDER BY createdAt ASC, id ASC
    """, (email, phone))
    return [dict(contact) for contact in cursor.fetchall()]


def get_contacts_by_ids(conn, contact_ids):
    """Fetch contacts by id, oldest first"""
    contact_ids = sorted(contact_ids)
    if not contact_ids:
        return []

    placeholders = ",".join("?" for _ in contact_ids)
    cursor = conn.execute(f"""
        SELECT * FROM Contact
        WHERE id IN ({placeholders})
        ORDER BY createdAt ASC, id ASC
    """, contact_ids)
    return [dict(contact) for contact in cursor.fetchall()]


def get_all_linked_contacts(conn, primary_id: int):
    """Return the primary followed by every contact linked to it"""
    primary = conn.execute("SELECT * FROM Contact WHERE id = ?", (primary_id,)).fetchone()

    if not primary:
        return []

    secondaries = conn.execute("""
        SELECT * FROM Contact
        WHERE linkedId = ?
        ORDER BY createdAt ASC, id ASC
    """, (primary_id,)).fetchall()

    return [dict(primary)] + [dict(contact) for contact in secondaries]


def create_contact(conn, email: str = None, phone: str = None, linked_id: int = None, precedence: str = "primary"):
    """Create a new contact"""
    now = _now()

    cursor = conn.execute("""
        INSERT INTO Contact (phoneNumber, email, linkedId, linkPrecedence, createdAt, updatedAt)
        VALUES (?, ?, ?, ?, ?, ?)
    """, (phone, email, linked_id, precedence, now, now))

    return cursor.lastrowid


def update_to_secondary(conn, contact_id: int, primary_id: int):
    conn.execute("""
        UPDATE Contact
        SET linkedId = ?, linkPrecedence = 'secondary', updatedAt = ?
        WHERE id = ?
    """, (primary_id, _now(), contact_id))


def relink_secondaries(conn, old_primary_id: int, new_primary_id: int):
    """Point every contact linked to old_primary_id at new_primary_id"""
    cursor = conn.execute("""
        UPDATE Contact
        SET linkedId = ?, updatedAt = ?
        WHERE linkedId = ?
    """, (new_primary_id, _now(), old_primary_id))
    return cursor.rowcount
