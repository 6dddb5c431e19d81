"""Property records models.

The entity graph behind the bulk load/save API:
- Users with optional owner/tenant profiles and wallets
- Owners -> Properties -> Units -> Appliances
- Lease contracts with their payment schedules
- Ledger records (transactions, expenses, payout vouchers) and reminders
- The AppSettings singleton

Primary keys are client-supplied strings.
"""

import enum
import uuid

from sqlalchemy import (
    Boolean,
    Enum,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import Base, TimestampMixin

SETTINGS_ID = "settings"


class UserRole(str, enum.Enum):
    """Available user roles."""

    SYSTEM = "system"
    ADMIN = "admin"
    LANDLORD = "landlord"
    TENANT = "tenant"


class User(TimestampMixin, Base):
    """Login identity. ``password`` always holds a bcrypt hash."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            native_enum=False,
            validate_strings=True,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=UserRole.TENANT,
    )
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Relationships
    wallet: Mapped["Wallet"] = relationship(
        "Wallet", back_populates="user", uselist=False
    )
    owner: Mapped["Owner"] = relationship(
        "Owner", back_populates="user", uselist=False
    )
    tenant: Mapped["Tenant"] = relationship(
        "Tenant", back_populates="user", uselist=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


class Owner(TimestampMixin, Base):
    """Landlord profile, linked 1:1 to a user."""

    __tablename__ = "owners"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    national_id: Mapped[str | None] = mapped_column(
        String(32), unique=True, nullable=True
    )
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    iban: Mapped[str | None] = mapped_column(String(64), nullable=True)
    management_fee_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    management_fee_value: Mapped[str | None] = mapped_column(String(32), nullable=True)
    management_agreement_status: Mapped[str | None] = mapped_column(
        String(32), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("users.id"), unique=True, nullable=True
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="owner")
    properties: Mapped[list["Property"]] = relationship(
        "Property", back_populates="owner"
    )
    reminders: Mapped[list["Reminder"]] = relationship(
        "Reminder", back_populates="owner"
    )
    payout_vouchers: Mapped[list["PayoutVoucher"]] = relationship(
        "PayoutVoucher", back_populates="owner"
    )

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name={self.name})>"


class Tenant(TimestampMixin, Base):
    """Tenant profile, linked 1:1 to a user.

    ``tenant_id_no`` is the civil ID; the UI calls it ``tenantId``.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tenant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    tenant_id_no: Mapped[str | None] = mapped_column(
        String(32), unique=True, nullable=True
    )
    tenant_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("users.id"), unique=True, nullable=True
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="tenant")
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="tenant"
    )
    contracts: Mapped[list["LeaseContract"]] = relationship(
        "LeaseContract", back_populates="tenant"
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.tenant_name})>"


class Property(TimestampMixin, Base):
    """A building or complex owned by exactly one owner."""

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    property_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("owners.id"), nullable=False
    )
    owner_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    owner: Mapped["Owner"] = relationship("Owner", back_populates="properties")
    units: Mapped[list["Unit"]] = relationship("Unit", back_populates="property")
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="property"
    )

    __table_args__ = (Index("ix_properties_owner", "owner_id"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.property_name})>"


class Unit(TimestampMixin, Base):
    """Rentable unit within a property."""

    __tablename__ = "units"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    property_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("properties.id"), nullable=False
    )
    unit_number: Mapped[str] = mapped_column(String(32), nullable=False)
    unit_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rent_amount: Mapped[str | None] = mapped_column(String(32), nullable=True)
    area: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rooms: Mapped[str | None] = mapped_column(String(16), nullable=True)
    bathrooms: Mapped[str | None] = mapped_column(String(16), nullable=True)
    floor: Mapped[str | None] = mapped_column(String(16), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    property: Mapped["Property"] = relationship("Property", back_populates="units")
    appliances: Mapped[list["Appliance"]] = relationship(
        "Appliance", back_populates="unit"
    )

    __table_args__ = (Index("ix_units_property", "property_id"),)

    def __repr__(self) -> str:
        return f"<Unit(id={self.id}, number={self.unit_number})>"


class Appliance(TimestampMixin, Base):
    """Appliance installed in a unit. Read-only through the bulk API."""

    __tablename__ = "appliances"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    unit_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("units.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[str | None] = mapped_column(String(120), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(120), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    purchase_date: Mapped[str | None] = mapped_column(String(10), nullable=True)

    unit: Mapped["Unit"] = relationship("Unit", back_populates="appliances")


class LeaseContract(TimestampMixin, Base):
    """Lease between a tenant and a property unit.

    Owns its payment schedule: rows are replaced wholesale on every save.
    """

    __tablename__ = "lease_contracts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    contract_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    property_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("properties.id"), nullable=False
    )
    property_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    unit_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("units.id"), nullable=True
    )
    tenant_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("tenants.id"), nullable=False
    )
    tenant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tenant_national_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    tenant_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    landlord_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    landlord_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    landlord_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    represented_by: Mapped[str | None] = mapped_column(String(32), nullable=True)
    start_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    end_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    rent_amount: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rent_cycle: Mapped[str | None] = mapped_column(String(32), nullable=True)
    security_deposit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    lease_purpose: Mapped[str | None] = mapped_column(String(64), nullable=True)
    terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    contract_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    approval_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="contracts")
    payment_schedule: Mapped[list["PaymentSchedule"]] = relationship(
        "PaymentSchedule",
        back_populates="contract",
        order_by="PaymentSchedule.due_date",
    )
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="contract"
    )
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="contract"
    )

    __table_args__ = (
        Index("ix_lease_contracts_tenant", "tenant_id"),
        Index("ix_lease_contracts_unit", "unit_id"),
    )

    def __repr__(self) -> str:
        return f"<LeaseContract(id={self.id}, status={self.contract_status})>"


class PaymentSchedule(TimestampMixin, Base):
    """One due installment of a lease contract."""

    __tablename__ = "payment_schedules"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    contract_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("lease_contracts.id", ondelete="CASCADE"),
        nullable=False,
    )
    due_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    amount: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)

    contract: Mapped["LeaseContract"] = relationship(
        "LeaseContract", back_populates="payment_schedule"
    )

    __table_args__ = (Index("ix_payment_schedules_contract", "contract_id"),)


class Document(TimestampMixin, Base):
    """File attached to a property, tenant or contract."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    doc_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    uploaded_at: Mapped[str | None] = mapped_column(String(32), nullable=True)
    property_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("properties.id", ondelete="SET NULL"), nullable=True
    )
    tenant_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True
    )
    contract_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("lease_contracts.id", ondelete="SET NULL"), nullable=True
    )

    property: Mapped["Property"] = relationship(
        "Property", back_populates="documents"
    )
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="documents")
    contract: Mapped["LeaseContract"] = relationship(
        "LeaseContract", back_populates="documents"
    )


class Transaction(TimestampMixin, Base):
    """Ledger entry, optionally tied to a contract and wallet."""

    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    contract_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("lease_contracts.id"), nullable=True
    )
    wallet_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("wallets.id"), nullable=True
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)

    contract: Mapped["LeaseContract"] = relationship(
        "LeaseContract", back_populates="transactions"
    )


class Expense(TimestampMixin, Base):
    """Expense booked against a property or unit."""

    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    property_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("properties.id"), nullable=True
    )
    unit_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("units.id"), nullable=True
    )
    category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    paid_by: Mapped[str | None] = mapped_column(String(32), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)

    property: Mapped["Property"] = relationship("Property")
    unit: Mapped["Unit"] = relationship("Unit")


class Wallet(TimestampMixin, Base):
    """Balance ledger owned by a user or the system."""

    __tablename__ = "wallets"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("users.id"), unique=True, nullable=True
    )
    owner_type: Mapped[str] = mapped_column(String(16), nullable=False, default="user")
    balance: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    user: Mapped["User"] = relationship("User", back_populates="wallet")


class Reminder(TimestampMixin, Base):
    """Follow-up reminder, optionally for an owner."""

    __tablename__ = "reminders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("owners.id"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    reminder_type: Mapped[str | None] = mapped_column(String(32), nullable=True)
    due_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_done: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    owner: Mapped["Owner"] = relationship("Owner", back_populates="reminders")


class PayoutVoucher(TimestampMixin, Base):
    """Payout of collected rent to an owner."""

    __tablename__ = "payout_vouchers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("owners.id"), nullable=False
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    period: Mapped[str | None] = mapped_column(String(32), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    owner: Mapped["Owner"] = relationship("Owner", back_populates="payout_vouchers")


class AppSettings(Base):
    """Global configuration singleton, keyed by ``SETTINGS_ID``."""

    __tablename__ = "app_settings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=SETTINGS_ID)
    app_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    primary_color: Mapped[str | None] = mapped_column(String(32), nullable=True)
    contract_template: Mapped[str | None] = mapped_column(String(64), nullable=True)
    statement_template: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_demo_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<AppSettings(app_name={self.app_name}, demo={self.is_demo_mode})>"
