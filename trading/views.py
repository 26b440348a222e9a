"""
API Layer — Energy Market Endpoints (Django REST Framework)

Thin controllers over trading.application.use_cases. Each view:

- Validates and coerces request input
- Builds the caller's SessionContext from the Django session
- Delegates to the use case
- Translates domain exceptions into HTTP responses

Successful operations that return a message respond with {"message": ...};
failures respond with {"error": ...}.
"""

import math

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from trading.application import use_cases
from trading.domain.exceptions import (
    CounterpartyNotFound,
    InsufficientEnergy,
    InvalidAmount,
    InvalidBalance,
    InvalidCredentials,
    InvalidOperation,
    LedgerError,
    NoActiveSession,
    NotAuthenticated,
    ParticipantAlreadyExists,
)
from trading.domain.session import SessionContext
from trading.serializers import EnergyMarketSerializer, EnergyTransactionSerializer

ERROR_STATUS = {
    NotAuthenticated: status.HTTP_401_UNAUTHORIZED,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    NoActiveSession: status.HTTP_400_BAD_REQUEST,
    ParticipantAlreadyExists: status.HTTP_409_CONFLICT,
    CounterpartyNotFound: status.HTTP_404_NOT_FOUND,
    InsufficientEnergy: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidOperation: status.HTTP_400_BAD_REQUEST,
    InvalidAmount: status.HTTP_400_BAD_REQUEST,
    InvalidBalance: status.HTTP_400_BAD_REQUEST,
}


def error_response(exc):
    return Response(
        {"error": str(exc)},
        status=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


def bad_request(message):
    return Response({"error": message}, status=status.HTTP_400_BAD_REQUEST)


def parse_number(value):
    """Coerces a request value to a finite float, or returns None."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


class MarketDetailsView(APIView):
    """GET /api/market/"""

    def get(self, request):
        details = use_cases.get_market_details()
        return Response(EnergyMarketSerializer(details).data, status=status.HTTP_200_OK)


class EnergyBalanceView(APIView):
    """GET /api/market/balance/"""

    def get(self, request):
        try:
            message = use_cases.get_energy_balance(SessionContext.from_request(request))
        except LedgerError as exc:
            return error_response(exc)
        return Response({"message": message}, status=status.HTTP_200_OK)


class TransactionsView(APIView):
    """
    GET  /api/market/transactions/: trades involving the logged-in participant
    POST /api/market/transactions/: execute a trade against a counterparty
    """

    def get(self, request):
        try:
            records = use_cases.get_participant_transactions(SessionContext.from_request(request))
        except LedgerError as exc:
            return error_response(exc)
        return Response(EnergyTransactionSerializer(records, many=True).data, status=status.HTTP_200_OK)

    def post(self, request):
        amount = request.data.get("amount")
        operation = request.data.get("operation")
        counterparty = request.data.get("counterparty")

        if amount in (None, "") or not operation or not counterparty:
            return bad_request("amount, operation, and counterparty are required.")

        amount = parse_number(amount)
        if amount is None:
            return bad_request("amount must be a number.")

        try:
            message = use_cases.create_transaction(
                SessionContext.from_request(request), amount, operation, counterparty,
            )
        except LedgerError as exc:
            return error_response(exc)
        return Response({"message": message}, status=status.HTTP_201_CREATED)


class ParticipantsView(APIView):
    """POST /api/market/participants/"""

    def post(self, request):
        username = request.data.get("username")
        password = request.data.get("password")
        energy_balance = request.data.get("energy_balance")

        if not username or not password or energy_balance in (None, ""):
            return bad_request("username, password, and energy_balance are required.")

        energy_balance = parse_number(energy_balance)
        if energy_balance is None:
            return bad_request("energy_balance must be a number.")

        try:
            message = use_cases.register_participant(username, password, energy_balance)
        except LedgerError as exc:
            return error_response(exc)
        return Response({"message": message}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/market/login/"""

    def post(self, request):
        username = request.data.get("username")
        password = request.data.get("password")

        if not username or password is None:
            return bad_request("username and password are required.")

        try:
            message = use_cases.authenticate_participant(
                SessionContext.from_request(request), username, password,
            )
        except LedgerError as exc:
            return error_response(exc)
        return Response({"message": message}, status=status.HTTP_200_OK)


class LogoutView(APIView):
    """POST /api/market/logout/"""

    def post(self, request):
        try:
            message = use_cases.sign_out(SessionContext.from_request(request))
        except LedgerError as exc:
            return error_response(exc)
        return Response({"message": message}, status=status.HTTP_200_OK)


class AuthenticatedParticipantView(APIView):
    """GET /api/market/me/"""

    def get(self, request):
        try:
            username = use_cases.get_authenticated_participant(SessionContext.from_request(request))
        except LedgerError as exc:
            return error_response(exc)
        return Response({"username": username}, status=status.HTTP_200_OK)
