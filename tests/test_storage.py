from __future__ import annotations

import pytest
from sqlalchemy import select

from contacts_service.core.errors import RegistryFrozenError, StorageNotConfiguredError
from contacts_service.domain.contact import Contact
from contacts_service.domain.email import EmailAddress
from contacts_service.domain.hashing import hash64
from contacts_service.domain.kinds import Kind
from contacts_service.domain.mail import MailAddress
from contacts_service.domain.phone import PhoneNumber
from contacts_service.models import ContactPhoneTable, PhoneNumberTable
from contacts_service.storage.phones import PhoneStorage
from contacts_service.storage.registry import StorageRegistry, registry


def _george(phone="415-888-8899"):
    contact = Contact.named("George Jungleman")
    contact.with_phone(Kind.HOME, PhoneNumber.from_text(phone))
    return contact


# ---- registry ----


class TestRegistry:
    def test_configured_registry_is_frozen(self, db):
        assert registry.frozen
        assert PhoneNumber in registry
        with pytest.raises(RegistryFrozenError):
            registry.register(PhoneNumber, PhoneStorage)

    def test_lookup_before_configuration_fails(self, db):
        empty = StorageRegistry()
        with pytest.raises(StorageNotConfiguredError):
            empty.storage(db, PhoneNumber)

    def test_gateways_are_bound_to_the_session(self, db):
        store = registry.storage(db, PhoneNumber)
        assert isinstance(store, PhoneStorage)
        assert store.db is db


# ---- immutable values ----


class TestValues:
    def test_save_assigns_key_and_stores_hash(self, db):
        saved = PhoneNumber.from_text("415-888-8899").save_item(db)
        assert saved.key > 0

        row = db.get(PhoneNumberTable, saved.key)
        assert row.hash_key == hash64("415-888-8899")
        assert (row.area_code, row.prefix, row.suffix) == ("415", "888", "8899")

    def test_saving_equal_values_shares_one_row(self, db):
        first = EmailAddress.from_text("george@jungleman.com").save_item(db)
        second = EmailAddress.from_text("george@jungleman.com").save_item(db)
        assert first.key == second.key
        assert EmailAddress.count(db) == 1

    def test_saved_value_returns_itself(self, db):
        saved = PhoneNumber.from_text("415-888-8899").save_item(db)
        assert saved.save_item(db) is saved

    def test_find_by_hash_returns_saved_row(self, db):
        saved = MailAddress.from_text("1234 Main St, Los Angeles, CA 90066").save_item(db)
        found = MailAddress.from_text("1234 main st., los angeles, ca 90066").find_item(db)
        assert found.key == saved.key
        assert found == saved

    def test_find_by_key(self, db):
        saved = PhoneNumber.from_text("415-888-8899").save_item(db)
        probe = PhoneNumber()
        probe.key = saved.key
        assert probe.find_item(db) == saved

    def test_edited_value_resolves_to_a_new_row(self, db):
        saved = PhoneNumber.from_text("415-888-8899").save_item(db)
        old_key = saved.key
        saved.suffix = "1111"
        again = saved.save_item(db)
        assert again.key not in (0, old_key)
        assert again.value == "415-888-1111"
        assert PhoneNumber.count(db) == 2

    def test_remove_deletes_the_row(self, db):
        saved = PhoneNumber.from_text("415-888-8899").save_item(db)
        assert saved.remove_item(db) is True
        assert PhoneNumber.count(db) == 0

    def test_insert_race_resolves_to_existing_row(self, db):
        saved = PhoneNumber.from_text("415-888-8899").save_item(db)
        # bypass the hash lookup, as a concurrent writer would
        raced = PhoneNumber.storage(db).save(PhoneNumber.from_text("415-888-8899"))
        assert raced.key == saved.key
        assert PhoneNumber.count(db) == 1

    def test_find_all_in_natural_order(self, db):
        for text in ("510-111-2222", "415-888-8899", "415-111-2222"):
            PhoneNumber.from_text(text).save_item(db)
        values = [p.value for p in PhoneNumber.storage(db).find_all()]
        assert values == ["415-111-2222", "415-888-8899", "510-111-2222"]


# ---- contacts ----


class TestContacts:
    def test_save_saves_parts_first(self, db):
        saved = _george().save_item(db)
        assert saved.key > 0
        assert saved.hash_key == hash64("George Jungleman")
        assert saved.phones[Kind.HOME].key > 0

        found = Contact.find_key(db, saved.key)
        assert found.phones[Kind.HOME] == PhoneNumber.from_text("415-888-8899")
        assert found.phones[Kind.HOME].key == saved.phones[Kind.HOME].key

    def test_saving_same_name_returns_existing_contact(self, db):
        first = _george().save_item(db)
        second = Contact.named("george jungleman").save_item(db)
        assert second.key == first.key
        assert Contact.count(db) == 1

    def test_contacts_share_values(self, db):
        george = _george().save_item(db)
        jane = Contact.named("Jane Jungleman").with_phone(Kind.HOME, PhoneNumber.from_text("415-888-8899")).save_item(db)
        assert jane.phones[Kind.HOME].key == george.phones[Kind.HOME].key
        assert PhoneNumber.count(db) == 1

    def test_update_adds_and_drops_parts(self, db):
        saved = _george().save_item(db)
        saved.with_phone(Kind.HOME, None)
        saved.with_phone(Kind.WORK, PhoneNumber.from_text("415-111-2222"))
        saved.with_email(Kind.HOME, EmailAddress.from_text("george@jungleman.com"))
        updated = saved.save_item(db)
        assert updated.key == saved.key

        found = Contact.find_key(db, saved.key)
        assert set(found.phones) == {Kind.WORK}
        assert found.emails[Kind.HOME].value == "george@jungleman.com"
        # dropped values are not collected
        assert PhoneNumber.count(db) == 2

    def test_update_replaces_value_in_place(self, db):
        saved = _george().save_item(db)
        saved.merge_phone(Kind.HOME, "415-000-0000", [])
        saved.save_item(db)

        found = Contact.find_key(db, saved.key)
        assert found.phones[Kind.HOME].value == "415-000-0000"
        links = db.execute(select(ContactPhoneTable).where(ContactPhoneTable.contact_id == saved.key)).scalars().all()
        assert len(links) == 1

    def test_every_stored_part_is_saved(self, db):
        contact = _george()
        contact.with_address(Kind.WORK, MailAddress.from_text("1234 Main St, Los Angeles, CA 90066"))
        saved = contact.save_item(db)
        for m in Contact.find_key(db, saved.key).mechanisms:
            assert m.mechanism.key != 0
            assert m.mechanism.find_item(db) == m.mechanism

    def test_remove_keeps_shared_values(self, db):
        saved = _george().save_item(db)
        assert saved.remove_item(db) is True
        assert Contact.find_key(db, saved.key) is None
        assert PhoneNumber.count(db) == 1
        assert db.execute(select(ContactPhoneTable)).first() is None

    def test_remove_unsaved_contact(self, db):
        assert _george().remove_item(db) is False

    def test_finders(self, db):
        _george().save_item(db)
        Contact.named("Adam Smith").with_email(Kind.WORK, EmailAddress.from_text("adam@smith.com")).save_item(db)

        assert Contact.find_first(db).name == "Adam Smith"
        assert [c.name for c in Contact.find_all(db)] == ["Adam Smith", "George Jungleman"]
        assert [c.name for c in Contact.like(db, "jungle")] == ["George Jungleman"]
        assert [c.name for c in Contact.like(db, "")] == ["Adam Smith", "George Jungleman"]
        assert [c.name for c in Contact.find_named(db, "george jungleman")] == ["George Jungleman"]
        assert Contact.find_named(db, "Nobody Here") == []

        phone = PhoneNumber.from_text("415-888-8899")
        assert [c.name for c in Contact.find_similar_phone(db, phone)] == ["George Jungleman"]
        email = EmailAddress.from_text("adam@smith.com")
        assert [c.name for c in Contact.find_similar_email(db, email)] == ["Adam Smith"]

    def test_find_by_shared_value_lists_each_contact_once(self, db):
        contact = _george()
        contact.with_phone(Kind.WORK, PhoneNumber.from_text("415-888-8899"))
        contact.save_item(db)
        Contact.named("Jane Jungleman").with_phone(Kind.MOBILE, PhoneNumber.from_text("415-888-8899")).save_item(db)

        found = Contact.find_similar_phone(db, PhoneNumber.from_text("415-888-8899"))
        assert [c.name for c in found] == ["George Jungleman", "Jane Jungleman"]

    def test_find_by_address_and_city(self, db):
        address = MailAddress.from_text("1234 Main St, Los Angeles, CA 90066")
        _george().with_address(Kind.HOME, address).save_item(db)
        Contact.named("Adam Smith").save_item(db)

        assert [c.name for c in Contact.find_similar_address(db, address)] == ["George Jungleman"]
        assert [c.name for c in Contact.find_matching(db, "", city="los angeles")] == ["George Jungleman"]
        assert [c.name for c in Contact.find_matching(db, "", zip="90066")] == ["George Jungleman"]
        assert Contact.find_matching(db, "", zip="10001") == []
        assert len(Contact.find_matching(db, None)) == 2


# ---- duplicate checks ----


class TestCheckParts:
    def test_clear_for_new_values(self, db):
        assert _george().check_parts(db) == []

    def test_reports_duplicate_name_and_values(self, db):
        _george().save_item(db)
        messages = _george().check_parts(db)
        assert messages == [
            "'George Jungleman' duplicates existing contact",
            "'415-888-8899' duplicates existing phone number",
        ]

    def test_saved_parts_are_not_duplicates(self, db):
        saved = _george().save_item(db)
        assert saved.check_parts(db) == []

    def test_reports_email_and_address(self, db):
        EmailAddress.from_text("george@jungleman.com").save_item(db)
        MailAddress.from_text("1234 Main St, Los Angeles, CA 90066").save_item(db)

        contact = Contact.named("George Jungleman")
        contact.with_email(Kind.WORK, EmailAddress.from_text("george@jungleman.com"))
        contact.with_address(Kind.SHIPPING, MailAddress.from_text("1234 Main St, Los Angeles, CA 90066"))
        assert contact.check_parts(db) == [
            "'george@jungleman.com' duplicates existing email address",
            "'1234 Main St, Los Angeles, CA 90066' duplicates existing mail address",
        ]

    def test_only_api_kinds_are_checked(self, db):
        EmailAddress.from_text("george@jungleman.com").save_item(db)
        contact = Contact.named("George Jungleman")
        contact.with_email(Kind.MOBILE, EmailAddress.from_text("george@jungleman.com"))
        assert contact.check_parts(db) == []

    def test_stale_keys_are_discarded(self, db):
        saved = _george().with_address(Kind.HOME, MailAddress.from_text("1234 Main St, Los Angeles, CA 90066")).save_item(db)
        old_key = saved.addresses[Kind.HOME].key
        # a client edits the value but sends its old key
        address = MailAddress("1234 Main St", "", "Sometown", "CA", "90066")
        address.key = old_key
        saved.with_address(Kind.HOME, address)
        saved.discard_stale_keys(db)

        assert address.key == 0
        assert saved.phones[Kind.HOME].key != 0
        updated = saved.save_item(db)
        assert updated.addresses[Kind.HOME].key not in (0, old_key)
        assert MailAddress.count(db) == 2

    def test_contact_insert_race_resolves_to_existing_row(self, db):
        saved = _george().save_item(db)
        # bypass the hash lookup, as a concurrent writer would
        raced = Contact.storage(db).save(Contact.named("George Jungleman"))
        assert raced.key == saved.key
        assert raced.phones[Kind.HOME].key == saved.phones[Kind.HOME].key
        assert Contact.count(db) == 1
