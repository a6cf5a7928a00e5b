"""
In-memory clinic backend for tests.

Serves the shift, work shift and appointment endpoints through
``httpx.MockTransport`` and enforces the backend rules the client relies on:
the shift state machine, holiday and slot conflicts, and the atomic
reschedule swap.
"""

import itertools
import json
import re
from datetime import date, datetime
from typing import Any

import httpx

from clinic_scheduling.domains.scheduling.domain.entities import Appointment, EmployeeShift, WorkShiftTemplate
from tests.utils.builders import AFTERNOON, MORNING, appointment_payload, shift_payload, template_payload

API_PREFIX = "/api/v1"


def envelope(data: Any, status: int = 200, message: str = "Success") -> httpx.Response:
    return httpx.Response(status, json={"statusCode": status, "error": None, "message": message, "data": data})


def rejection(status: int, code: str, message: str) -> httpx.Response:
    return httpx.Response(status, json={"statusCode": status, "error": code, "message": message, "data": None})


class FakeClinicBackend:
    """Stateful fake of the clinic REST API."""

    def __init__(self):
        self.work_shifts: dict[str, dict[str, Any]] = {t.shift_id: template_payload(t) for t in (MORNING, AFTERNOON)}
        self.employees: dict[int, dict[str, Any]] = {}
        self.staff_codes: dict[str, dict[str, Any]] = {}
        self.shifts: dict[str, dict[str, Any]] = {}
        self.holidays: set[date] = set()
        self.appointments: dict[str, dict[str, Any]] = {}
        self.services: dict[int, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    # =========================================================================
    # Seeding
    # =========================================================================

    def add_employee(self, employee_id: int, full_name: str = "", employee_code: str | None = None) -> None:
        self.employees[employee_id] = {
            "employee_id": employee_id,
            "full_name": full_name or f"Employee {employee_id}",
            "position": "DENTIST",
        }
        if employee_code:
            self.staff_codes[employee_code] = {"employeeCode": employee_code, "fullName": full_name}

    def add_template(self, template: WorkShiftTemplate) -> None:
        self.work_shifts[template.shift_id] = template_payload(template)

    def add_shift(self, shift: EmployeeShift) -> None:
        if shift.employee_id not in self.employees:
            self.add_employee(shift.employee_id, shift.employee.full_name)
        self.shifts[shift.employee_shift_id] = shift_payload(shift)

    def add_holiday(self, holiday: date) -> None:
        self.holidays.add(holiday)

    def add_appointment(self, appointment: Appointment) -> None:
        payload = appointment_payload(appointment)
        self.appointments[appointment.appointment_code] = payload
        for service in payload["services"]:
            if service["serviceId"] is not None:
                self.services[service["serviceId"]] = dict(service)
        if appointment.doctor:
            self.staff_codes.setdefault(
                appointment.doctor.employee_code,
                {"employeeCode": appointment.doctor.employee_code, "fullName": appointment.doctor.full_name},
            )

    def add_service(self, service_id: int, service_code: str, service_name: str = "") -> None:
        self.services[service_id] = {"serviceId": service_id, "serviceCode": service_code, "serviceName": service_name}

    # =========================================================================
    # Transport
    # =========================================================================

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path_pattern: str) -> list[httpx.Request]:
        """Recorded requests matching a method and a path regex (without the /api/v1 prefix)."""
        return [
            request
            for request in self.requests
            if request.method == method and re.fullmatch(path_pattern, self._path(request))
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = self._path(request)
        method = request.method

        if method == "GET" and path == "/shifts":
            return self._list_shifts(request)
        if method == "GET" and path == "/shifts/summary":
            return self._summary(request)
        if method == "POST" and path == "/shifts":
            return self._create_shift(self._body(request))
        if method == "GET" and path == "/work-shifts":
            return envelope(list(self.work_shifts.values()))

        match = re.fullmatch(r"/shifts/([^/]+)", path)
        if match:
            shift_id = match.group(1)
            if method == "GET":
                return self._get_shift(shift_id)
            if method == "PATCH":
                return self._update_shift(shift_id, self._body(request))
            if method == "DELETE":
                return self._delete_shift(shift_id)

        match = re.fullmatch(r"/appointments/([^/]+)/reschedule", path)
        if match and method == "POST":
            return self._reschedule(match.group(1), self._body(request))

        match = re.fullmatch(r"/appointments/([^/]+)", path)
        if match and method == "GET":
            appointment = self.appointments.get(match.group(1))
            if appointment is None:
                return rejection(404, "APPOINTMENT_NOT_FOUND", f"Appointment {match.group(1)} not found")
            return envelope(appointment)

        return rejection(404, "error.not.found", f"No route for {method} {path}")

    # =========================================================================
    # Shifts
    # =========================================================================

    def _list_shifts(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        start = date.fromisoformat(params["start_date"])
        end = date.fromisoformat(params["end_date"])
        employee_id = params.get("employee_id")
        status = params.get("status")
        page = int(params.get("page", 0))
        size = int(params.get("size", 20))

        matching = [
            shift
            for shift in self.shifts.values()
            if start <= date.fromisoformat(shift["work_date"]) <= end
            and (employee_id is None or shift["employee"]["employee_id"] == int(employee_id))
            and (status is None or shift["status"] == status)
        ]
        matching.sort(key=lambda s: (s["work_date"], s["work_shift"]["start_time"]))

        total_pages = max(1, -(-len(matching) // size))
        content = matching[page * size : (page + 1) * size]
        return envelope(
            {
                "content": content,
                "totalElements": len(matching),
                "totalPages": total_pages,
                "first": page == 0,
                "last": page >= total_pages - 1,
                "number": page,
                "size": size,
            }
        )

    def _summary(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        start = date.fromisoformat(params["start_date"])
        end = date.fromisoformat(params["end_date"])
        rows: dict[str, dict[str, Any]] = {}
        for shift in self.shifts.values():
            if not start <= date.fromisoformat(shift["work_date"]) <= end:
                continue
            row = rows.setdefault(
                shift["work_date"], {"work_date": shift["work_date"], "total_shifts": 0, "status_breakdown": {}}
            )
            row["total_shifts"] += 1
            row["status_breakdown"][shift["status"]] = row["status_breakdown"].get(shift["status"], 0) + 1
        return envelope(list(rows.values()))

    def _get_shift(self, shift_id: str) -> httpx.Response:
        shift = self.shifts.get(shift_id)
        if shift is None:
            return rejection(404, "SHIFT_NOT_FOUND", f"Shift {shift_id} not found")
        return envelope(shift)

    def _create_shift(self, body: dict[str, Any]) -> httpx.Response:
        employee = self.employees.get(body.get("employee_id"))
        template = self.work_shifts.get(body.get("work_shift_id"))
        if employee is None or template is None:
            return rejection(404, "RELATED_RESOURCE_NOT_FOUND", "Employee or work shift not found")

        work_date = body["work_date"]
        if date.fromisoformat(work_date) in self.holidays:
            return rejection(409, "HOLIDAY_CONFLICT", f"{work_date} is a holiday")

        for shift in self.shifts.values():
            if (
                shift["employee"]["employee_id"] == employee["employee_id"]
                and shift["work_date"] == work_date
                and shift["work_shift"]["work_shift_id"] == template["work_shift_id"]
                and shift["status"] != "CANCELLED"
            ):
                return rejection(409, "SLOT_CONFLICT", "Employee already has this shift on this date")

        shift_id = f"EMS{next(self._ids):09d}"
        self.shifts[shift_id] = {
            "employee_shift_id": shift_id,
            "work_date": work_date,
            "status": "SCHEDULED",
            "source": "MANUAL_ENTRY",
            "notes": body.get("notes"),
            "employee": dict(employee),
            "work_shift": dict(template),
            "created_at": datetime(2025, 3, 1, 8, 0).isoformat(),
            "updated_at": None,
        }
        return envelope(self.shifts[shift_id], status=201, message="Created")

    def _update_shift(self, shift_id: str, body: dict[str, Any]) -> httpx.Response:
        shift = self.shifts.get(shift_id)
        if shift is None:
            return rejection(404, "SHIFT_NOT_FOUND", f"Shift {shift_id} not found")
        if shift["status"] in ("COMPLETED", "CANCELLED"):
            return rejection(409, "SHIFT_FINALIZED", f"Cannot update a {shift['status']} shift")
        if body.get("status") == "ON_LEAVE":
            return rejection(400, "INVALID_STATUS_TRANSITION", "ON_LEAVE is set by leave requests only")

        if "status" in body:
            shift["status"] = body["status"]
        if "notes" in body:
            shift["notes"] = body["notes"]
        return envelope(shift)

    def _delete_shift(self, shift_id: str) -> httpx.Response:
        shift = self.shifts.get(shift_id)
        if shift is None:
            return rejection(404, "SHIFT_NOT_FOUND", f"Shift {shift_id} not found")
        if shift["status"] == "COMPLETED":
            return rejection(409, "CANNOT_CANCEL_COMPLETED", "Completed shifts cannot be cancelled")
        if shift["status"] == "CANCELLED":
            return rejection(400, "INVALID_STATUS_TRANSITION", "Shift is already cancelled")
        if shift["source"] in ("BATCH_JOB", "REGISTRATION_JOB"):
            return rejection(409, "CANNOT_CANCEL_BATCH", "Batch shifts must be cancelled through a leave request")
        shift["status"] = "CANCELLED"
        return httpx.Response(204)

    # =========================================================================
    # Appointments
    # =========================================================================

    def _reschedule(self, code: str, body: dict[str, Any]) -> httpx.Response:
        old = self.appointments.get(code)
        if old is None:
            return rejection(404, "APPOINTMENT_NOT_FOUND", f"Appointment {code} not found")
        if old["status"] not in ("SCHEDULED", "CHECKED_IN"):
            return rejection(409, "APPOINTMENT_NOT_RESCHEDULABLE", f"Cannot reschedule a {old['status']} appointment")

        start = datetime.fromisoformat(body["newStartTime"])
        if start.date() in self.holidays:
            return rejection(409, "HOLIDAY_CONFLICT", f"{start.date()} is a holiday")

        doctor = self.staff_codes.get(body["newEmployeeCode"])
        if doctor is None:
            return rejection(404, "EMPLOYEE_NOT_FOUND", f"Employee {body['newEmployeeCode']} not found")

        if body.get("newServiceIds"):
            unknown = [sid for sid in body["newServiceIds"] if sid not in self.services]
            if unknown:
                return rejection(404, "SERVICE_NOT_FOUND", f"Services not found: {unknown}")
            services = [dict(self.services[sid]) for sid in body["newServiceIds"]]
        else:
            services = [dict(service) for service in old["services"]]

        participants = []
        for participant_code in body.get("newParticipantCodes") or []:
            staff = self.staff_codes.get(participant_code)
            if staff is None:
                return rejection(404, "PARTICIPANT_NOT_FOUND", f"Participant {participant_code} not found")
            participants.append({**staff, "role": "ASSISTANT"})

        new_code = f"APT-R{next(self._ids):04d}"
        new_appointment = {
            **old,
            "appointmentCode": new_code,
            "status": "SCHEDULED",
            "appointmentStartTime": start.isoformat(),
            "appointmentEndTime": None,
            "doctor": dict(doctor),
            "room": {"roomCode": body["newRoomCode"], "roomName": ""},
            "services": services,
            "participants": participants,
            "cancellationReason": None,
            "notes": "Rescheduled from previous appointment",
        }
        old["status"] = "CANCELLED"
        old["cancellationReason"] = body["reasonCode"]
        if body.get("cancelNotes"):
            old["notes"] = body["cancelNotes"]
        self.appointments[new_code] = new_appointment

        return envelope({"cancelledAppointment": dict(old), "newAppointment": dict(new_appointment)})

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path
        return path[len(API_PREFIX) :] if path.startswith(API_PREFIX) else path

    @staticmethod
    def _body(request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content or b"{}")
