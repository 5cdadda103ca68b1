"""
Seed data for the in-memory store.

Every call to build_seed() returns fresh model instances, so a reset never
shares records with an earlier run.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List

from freightdesk.schemas.billing import Dispute, Invoice, LineItem, Payment
from freightdesk.schemas.booking import Booking
from freightdesk.schemas.common import ActivityEntry
from freightdesk.schemas.exception import Attachment, ShipmentException
from freightdesk.schemas.notification import Notification
from freightdesk.schemas.quote import ChargeRow, Quote
from freightdesk.schemas.rate import RateCard
from freightdesk.schemas.rate_request import RateRequest
from freightdesk.schemas.tracking import Milestone, TrackedShipment
from freightdesk.schemas.vendor import Vendor, VendorOrder


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _quotes() -> List[Quote]:
    return [
        Quote(
            id="QT-240917-001", created_at=_ts("2025-09-16T10:00:00Z"),
            customer="Acme Textiles Pvt Ltd", direction="Export",
            origin_code="INNSA", origin_name="Nhava Sheva, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            service="FCL", container="20 ft - Standard",
            price_inr=1519384, validity=date(2025, 10, 15), status="Pending Approval",
            charges=[
                ChargeRow(label="Base Freight", amount=1300000),
                ChargeRow(label="Bunker & Surcharges", amount=120000),
                ChargeRow(label="Documentation", amount=30000),
                ChargeRow(label="Taxes", amount=69000),
            ],
        ),
        Quote(
            id="QT-240917-002", created_at=_ts("2025-09-16T12:10:00Z"),
            customer="Zen Importers", direction="Import",
            origin_code="CNSHA", origin_name="Shanghai, China",
            destination_code="INNSA", destination_name="Nhava Sheva, India",
            service="LCL", container="40 ft - Standard",
            price_inr=419384, validity=date(2025, 10, 10), status="Pending Approval",
            charges=[
                ChargeRow(label="Ocean + Console", amount=360000),
                ChargeRow(label="Destination", amount=30000),
                ChargeRow(label="Documentation", amount=9000),
                ChargeRow(label="Taxes", amount=20384),
            ],
        ),
        Quote(
            id="QT-240916-003", created_at=_ts("2025-09-15T09:15:00Z"),
            customer="Nimbus Global", direction="Export",
            origin_code="INMUN", origin_name="Mundra, India",
            destination_code="AEJEA", destination_name="Jebel Ali, UAE",
            service="FCL", container="40 ft - HC",
            price_inr=289000, validity=date(2025, 10, 20), status="Draft",
            charges=[
                ChargeRow(label="Base Freight", amount=250000),
                ChargeRow(label="Documentation", amount=12000),
                ChargeRow(label="Taxes", amount=27000),
            ],
        ),
        Quote(
            id="QT-240915-004", created_at=_ts("2025-09-14T15:40:00Z"),
            customer="Orbit Pharma Ltd", direction="Export",
            origin_code="INBLR", origin_name="Bengaluru, India",
            destination_code="DEFRA", destination_name="Frankfurt, Germany",
            service="Air", container="20 ft - Standard",
            price_inr=356500, validity=date(2025, 10, 5), status="Approved", approver="Ananya",
            charges=[
                ChargeRow(label="Air Freight", amount=318000),
                ChargeRow(label="Screening & Handling", amount=21000),
                ChargeRow(label="Documentation", amount=17500),
            ],
        ),
    ]


def _rate_requests() -> List[RateRequest]:
    return [
        RateRequest(
            id="CR-240917-001", created_at=_ts("2025-09-16T10:00:00Z"),
            customer="Acme Textiles Pvt Ltd", direction="Export",
            origin_code="INNSA", origin_name="Nhava Sheva, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            service="FCL", container="20 ft - Standard", weight_kg=19000, incoterm="FOB",
            validity=date(2025, 10, 15), target_rate_inr=1500000,
            notes="Direct service preferred; earliest sailing.", attachments=["so.pdf"],
        ),
        RateRequest(
            id="CR-240917-002", created_at=_ts("2025-09-16T12:30:00Z"),
            customer="Zen Importers", direction="Import",
            origin_code="CNSHA", origin_name="Shanghai, China",
            destination_code="INNSA", destination_name="Nhava Sheva, India",
            service="LCL", container="40 ft - Standard", weight_kg=6500, incoterm="CIF",
            validity=date(2025, 10, 10), target_rate_inr=420000,
            notes="Weekly console ok; need DO included.",
            status="Sales Review", assignee_role="Sales", assignee_name="Ananya",
        ),
        RateRequest(
            id="CR-240917-003", created_at=_ts("2025-09-15T16:45:00Z"),
            customer="Nimbus Global", direction="Export",
            origin_code="INMUN", origin_name="Mundra, India",
            destination_code="AEJEA", destination_name="Jebel Ali, UAE",
            service="FCL", container="40 ft - HC", weight_kg=23000, incoterm="EXW",
            validity=date(2025, 10, 20),
            status="Pricing Review", assignee_role="Pricing", assignee_name="Rohit",
        ),
    ]


def _bookings() -> List[Booking]:
    return [
        Booking(
            id="BK-250916-001", created_at=_ts("2025-09-16T08:45:00Z"),
            customer="Acme Textiles Pvt Ltd", direction="Export", service="FCL", carrier="MSC",
            origin_code="INNSA", origin_name="Nhava Sheva, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            container="20 ft - Standard", weight_kg=19000,
            etd=date(2025, 9, 22), eta=date(2025, 10, 14),
            status="Confirmed", ref="MSC1234567", docs=["so.pdf", "vgm.pdf"],
        ),
        Booking(
            id="BK-250916-002", created_at=_ts("2025-09-16T12:00:00Z"),
            customer="Zen Importers", direction="Import", service="LCL", carrier="CMA CGM",
            origin_code="CNSHA", origin_name="Shanghai, China",
            destination_code="INNSA", destination_name="Nhava Sheva, India",
            container="LCL", pieces=12, weight_kg=6500, cbm=28.4,
            etd=date(2025, 9, 24), eta=date(2025, 10, 8), status="New",
        ),
    ]


def _invoices() -> List[Invoice]:
    return [
        Invoice(
            id="INV-2509-001", created_at=_ts("2025-09-15T09:10:00Z"),
            customer="Acme Textiles Pvt Ltd", due_date=date(2025, 10, 5), status="Open",
            items=[
                LineItem(desc="Ocean Freight FCL 20'", qty=1, rate=480000),
                LineItem(desc="Documentation", qty=1, rate=12000),
                LineItem(desc="Taxes", qty=1, rate=27384),
            ],
        ),
        Invoice(
            id="INV-2509-002", created_at=_ts("2025-09-08T12:30:00Z"),
            customer="Zen Importers", due_date=date(2025, 9, 25), status="Overdue",
            items=[LineItem(desc="LCL Console + Dest.", qty=1, rate=189000)],
            notes="Reminder sent on 2025-09-27",
        ),
        Invoice(
            id="INV-2509-003", created_at=_ts("2025-09-01T11:00:00Z"),
            customer="Nimbus Global", due_date=date(2025, 9, 20), status="Paid",
            items=[LineItem(desc="FCL 40HC Export", qty=1, rate=289000)],
        ),
    ]


def _payments() -> List[Payment]:
    return [
        Payment(
            id="PMT-2509-101", received_on=date(2025, 9, 26), method="NEFT/RTGS",
            amount_inr=519384, customer="Acme Textiles Pvt Ltd",
            invoice_id="INV-2509-001", status="Allocated",
        ),
        Payment(
            id="PMT-2509-102", received_on=date(2025, 9, 27), method="UPI",
            amount_inr=189000, status="Unallocated", notes="No matching invoice",
        ),
    ]


def _disputes() -> List[Dispute]:
    return [
        Dispute(
            id="DSP-1001", invoice_id="INV-2509-002", customer="Zen Importers",
            raised_on=date(2025, 9, 28), reason="Overcharge on destination fees",
        ),
        Dispute(
            id="DSP-1002", invoice_id="INV-2509-003", customer="Nimbus Global",
            raised_on=date(2025, 9, 22), reason="Duplicate billing", status="Investigating",
        ),
    ]


def _vendors() -> List[Vendor]:
    return [
        Vendor(
            id="VND-0001", name="Mariner Logistics LLP", category="Trucking",
            contact="Amit Sharma", email="ops@marinerlogistics.in",
            gstin="27ABCDE1234F1Z5", docs=["gst.pdf", "msme.pdf"],
        ),
        Vendor(
            id="VND-0002", name="Skyway Warehousing", category="CFS / Warehouse",
            contact="Riya Singh", email="hello@skywaycfs.com", docs=["gst.pdf"], status="Approved",
        ),
        Vendor(
            id="VND-0003", name="Swift Customs Broking", category="CHA",
            contact="Sameer Khan", email="desk@swiftcha.com",
        ),
    ]


def _vendor_orders() -> List[VendorOrder]:
    return [
        VendorOrder(id="VO-101", vendor_name="Mariner Logistics LLP", service="Trucking",
                    ref="JOB-22451", ordered_on=date(2025, 9, 15), amount_inr=45000),
        VendorOrder(id="VO-102", vendor_name="Skyway Warehousing", service="CFS / Warehouse",
                    ref="JOB-22469", ordered_on=date(2025, 9, 16), amount_inr=21000, status="In Progress"),
        VendorOrder(id="VO-103", vendor_name="Swift Customs Broking", service="CHA",
                    ref="JOB-22488", ordered_on=date(2025, 9, 16), amount_inr=18000, status="Completed"),
    ]


def _exceptions() -> List[ShipmentException]:
    return [
        ShipmentException(
            exception_id="EX-1024", shipment_id="SH-9032", route="INBLR → DEHAM", mode="Air",
            type="Customs Hold", priority="High", sla_text="2h overdue", sla_state="overdue",
            created_at=date(2025, 12, 14), last_updated_at=date(2025, 12, 16),
            notes="Awaiting customs clearance; missing broker response.",
            attachments=[Attachment(name="Customs Query.pdf")],
            activity=[
                ActivityEntry(at=date(2025, 12, 14), by="System", text="Exception created: Customs Hold"),
                ActivityEntry(at=date(2025, 12, 16), by="Ops Bot", text="SLA breached; marked High priority"),
            ],
        ),
        ShipmentException(
            exception_id="EX-1019", shipment_id="SH-9001", route="CNSHA → USLAX", mode="Ocean",
            type="Carrier Delay", priority="Medium", owner="Priya", sla_text="4h left", sla_state="due",
            status="In Progress", created_at=date(2025, 12, 15), last_updated_at=date(2025, 12, 16),
            notes="Carrier indicated vessel schedule shift. Updating ETA.",
            attachments=[Attachment(name="Carrier Email.msg")],
            activity=[
                ActivityEntry(at=date(2025, 12, 15), by="Priya", text="Assigned to self; contacted carrier"),
                ActivityEntry(at=date(2025, 12, 16), by="Priya", text="Received carrier update; pending ETA confirmation"),
            ],
        ),
        ShipmentException(
            exception_id="EX-1012", shipment_id="SH-8840", route="VNHCM → USNYC", mode="Ocean",
            type="Documentation", priority="Low", owner="Rohan",
            status="Waiting External", created_at=date(2025, 12, 13), last_updated_at=date(2025, 12, 15),
            notes="Waiting for customer to send signed BL copy.",
            attachments=[Attachment(name="BL Draft.pdf")],
            activity=[
                ActivityEntry(at=date(2025, 12, 13), by="System", text="Exception created: Documentation"),
                ActivityEntry(at=date(2025, 12, 15), by="Rohan", text="Requested signed copy from customer"),
            ],
        ),
        ShipmentException(
            exception_id="EX-1007", shipment_id="SH-9100", route="SGSIN → JPTYO", mode="Air",
            type="Invoice Verification", priority="High", owner="Aditi", sla_text="Due today", sla_state="due",
            created_at=date(2025, 12, 16), last_updated_at=date(2025, 12, 16),
            notes="Commercial invoice verification required for release.",
            attachments=[Attachment(name="Invoice #4402.pdf")],
            activity=[
                ActivityEntry(at=date(2025, 12, 16), by="System", text="Exception created: Invoice Verification"),
            ],
        ),
    ]


def _notifications() -> List[Notification]:
    now = datetime.now(timezone.utc)
    return [
        Notification(
            id="ALR-0001", created_at=now - timedelta(minutes=10),
            title="Shipment Sailed", message="JOB-240921-001 has sailed from INNSA.",
            type="Shipment", severity="Info",
            related_id="JOB-240921-001", related_path="/tracking",
        ),
        Notification(
            id="ALR-0002", created_at=now - timedelta(hours=2),
            title="Quote Approval Needed", message="QT-240917-001 is pending approval.",
            type="Rates", severity="Warning",
            related_id="QT-240917-001", related_path="/quotes",
        ),
        Notification(
            id="ALR-0003", created_at=now - timedelta(days=3),
            title="Invoice Overdue", message="INV-2509-002 is overdue by 3 days.",
            type="Billing", severity="Critical", status="Read",
            related_id="INV-2509-002", related_path="/invoices",
        ),
        Notification(
            id="ALR-0004", created_at=now - timedelta(minutes=40),
            title="Document Missing", message="MBL is not uploaded for BK-250916-001.",
            type="Documents", severity="Warning", status="Snoozed",
            related_id="BK-250916-001", related_path="/bookings",
        ),
    ]


def _rates() -> List[RateCard]:
    return [
        RateCard(
            id="OF-1001", carrier="MSC", service="FCL",
            origin_code="INNSA", origin_name="Nhava Sheva, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            transit_days=24, base_inr=1300000, surcharges_inr=189000,
            validity=date(2025, 10, 12), source="Upload", notes="Direct svc; Wed cut-off",
        ),
        RateCard(
            id="OF-1002", carrier="CMA CGM", service="FCL",
            origin_code="INNSA", origin_name="Nhava Sheva, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            transit_days=27, base_inr=1225000, surcharges_inr=210000,
            validity=date(2025, 10, 10), source="API",
        ),
        RateCard(
            id="OF-1003", carrier="EK", service="Air",
            origin_code="INBOM", origin_name="Mumbai, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            transit_days=1, base_inr=270000, surcharges_inr=28000,
            validity=date(2025, 9, 25), source="API", notes="+FSC",
        ),
        RateCard(
            id="OF-1004", carrier="CMA CGM", service="LCL",
            origin_code="CNSHA", origin_name="Shanghai, China",
            destination_code="INNSA", destination_name="Nhava Sheva, India",
            transit_days=14, base_inr=380000, surcharges_inr=40000,
            validity=date(2025, 10, 10), source="Manual", notes="Weekly console",
        ),
        RateCard(
            id="OF-1005", carrier="Maersk", service="FCL",
            origin_code="INNSA", origin_name="Nhava Sheva, India",
            destination_code="DEHAM", destination_name="Hamburg, Germany",
            transit_days=23, base_inr=1340000, surcharges_inr=175000,
            validity=date(2025, 10, 20), source="API",
        ),
    ]


def _tracking() -> List[TrackedShipment]:
    stages = ["Planned", "Pickup Scheduled", "At CFS", "Gate-in", "Sailed", "Arrived", "Delivered"]

    def milestones(done_dates: List[date]) -> List[Milestone]:
        return [
            Milestone(name=name, done=i < len(done_dates), when=done_dates[i] if i < len(done_dates) else None)
            for i, name in enumerate(stages)
        ]

    return [
        TrackedShipment(
            id="JOB-240921-001", customer="Acme Textiles", route="INNSA → DEHAM", carrier="MSC",
            etd=date(2025, 9, 22), eta=date(2025, 10, 13),
            milestones=milestones([date(2025, 9, 15), date(2025, 9, 16), date(2025, 9, 17), date(2025, 9, 18)]),
        ),
        TrackedShipment(
            id="JOB-240921-014", customer="Zen Importers", route="CNSHA → INNSA", carrier="CMA CGM",
            etd=date(2025, 9, 24), eta=date(2025, 10, 8),
            milestones=milestones([date(2025, 9, 18)]),
        ),
    ]


def build_seed() -> Dict[str, List[Any]]:
    return {
        "quotes": _quotes(),
        "rates": _rates(),
        "rate_requests": _rate_requests(),
        "bookings": _bookings(),
        "invoices": _invoices(),
        "payments": _payments(),
        "disputes": _disputes(),
        "vendors": _vendors(),
        "vendor_orders": _vendor_orders(),
        "exceptions": _exceptions(),
        "notifications": _notifications(),
        "tracking": _tracking(),
    }
