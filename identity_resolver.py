"""
Contact identity resolution.

Links an incoming (email, phoneNumber) pair to the cluster of contacts that
share either identifier, merging clusters the pair bridges and recording any
identifier the cluster has not seen yet as a new secondary contact.
"""
import logging
import sqlite3
from typing import Optional

from contact_store import (
    create_contact,
    find_contacts,
    get_all_linked_contacts,
    get_contacts_by_ids,
    relink_secondaries,
    update_to_secondary,
)
from db_models import ContactResponse
from db_setup import transaction
from errors import InvalidRequest, StoreFailure

logger = logging.getLogger(__name__)


def identify_contact(email: Optional[str] = None, phone: Optional[str] = None, db_path=None) -> ContactResponse:
    """
    Resolve the contact cluster for an email and/or phone number.

    The whole lookup, merge and insert sequence runs in a single write
    transaction.

    Raises:
        InvalidRequest: neither email nor phone was given
        StoreFailure: the store raised; nothing from this call is committed
    """
    email = email or None
    phone = phone or None

    if not email and not phone:
        raise InvalidRequest("Either email or phoneNumber must be provided")

    try:
        with transaction(db_path) as conn:
            return _resolve(conn, email, phone)
    except sqlite3.Error as e:
        logger.exception("Contact store failure while identifying contact")
        raise StoreFailure("Contact store failure") from e


def _resolve(conn, email, phone) -> ContactResponse:
    existing_contacts = find_contacts(conn, email, phone)

    if not existing_contacts:
        contact_id = create_contact(conn, email, phone, None, "primary")
        logger.info(f"Created primary contact {contact_id}")

        return ContactResponse(
            primaryContactId=contact_id,
            emails=[email] if email else [],
            phoneNumbers=[phone] if phone else [],
            secondaryContactIds=[]
        )

    primary_ids = set()
    for contact in existing_contacts:
        if contact['linkPrecedence'] == 'primary':
            primary_ids.add(contact['id'])
        else:
            primary_ids.add(contact['linkedId'])

    primaries = get_contacts_by_ids(conn, primary_ids)
    primary_id = primaries[0]['id']

    for losing in primaries[1:]:
        merge_clusters(conn, losing['id'], primary_id)

    all_contacts = get_all_linked_contacts(conn, primary_id)

    if has_new_fact(all_contacts, email, phone):
        contact_id = create_contact(conn, email, phone, primary_id, "secondary")
        logger.info(f"Created secondary contact {contact_id} under primary {primary_id}")
        all_contacts = get_all_linked_contacts(conn, primary_id)

    return ContactResponse.from_cluster(primary_id, all_contacts)


def merge_clusters(conn, losing_id: int, winning_id: int):
    """Demote losing_id to a secondary of winning_id and move its secondaries over."""
    update_to_secondary(conn, losing_id, winning_id)
    moved = relink_secondaries(conn, losing_id, winning_id)
    logger.info(f"Merged primary {losing_id} into {winning_id} ({moved} secondaries re-pointed)")


def has_new_fact(contacts, email, phone) -> bool:
    known_emails = {c['email'] for c in contacts if c['email']}
    known_phones = {c['phoneNumber'] for c in contacts if c['phoneNumber']}

    if email and email not in known_emails:
        return True
    if phone and phone not in known_phones:
        return True
    return False
