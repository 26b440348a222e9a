"""
Application Use Cases — Energy Market Ledger

Every externally visible ledger operation lives here as a plain function.
Operations that depend on who is logged in take a SessionContext as their
first argument; the caller owns that context and decides how it is stored.

Core guarantees for trades:

- Atomicity: the transaction row, both balance updates and the market
  counter commit together inside transaction.atomic().
- Row-level locking: select_for_update() on both participants so the balance
  pre-check is made against the value that will be updated.
- Race-condition safety: balances and the market total are updated with F()
  expressions, never by writing back Python-side values.
- Explicit domain signaling: business rule violations raise the exceptions
  defined in trading.domain.exceptions; nothing is written when one is raised.

Trade direction is literal: on "buy" the logged-in participant gives energy
to the counterparty, on "sell" the counterparty gives energy to the
logged-in participant.
"""

import logging
import math

from django.db import IntegrityError, transaction
from django.db.models import F, Q

from trading.domain.clock import clock
from trading.domain.exceptions import (
    CounterpartyNotFound,
    InsufficientEnergy,
    InvalidAmount,
    InvalidBalance,
    InvalidCredentials,
    InvalidOperation,
    NoActiveSession,
    NotAuthenticated,
    ParticipantAlreadyExists,
)
from trading.models import EnergyMarket, EnergyTransaction, Participant

logger = logging.getLogger(__name__)


def _require_participant(session):
    participant = session.current_participant()
    if participant is None:
        raise NotAuthenticated()
    return participant


def register_participant(username, password, energy_balance):
    """
    Creates a participant with the given credentials and starting balance.

    Username format, password strength and the sign of the balance are not
    validated.
    """
    if not math.isfinite(energy_balance):
        logger.warning("Registration rejected, invalid balance: balance=%r", energy_balance)
        raise InvalidBalance(energy_balance)

    if Participant.objects.filter(username=username).exists():
        logger.warning("Registration rejected, username taken: username=%s", username)
        raise ParticipantAlreadyExists(username)

    try:
        with transaction.atomic():
            participant = Participant.objects.create(
                username=username,
                password=password,
                energy_balance=energy_balance,
            )
    except IntegrityError:
        # Lost a race against a concurrent registration of the same username
        logger.warning("Registration rejected, username taken: username=%s", username)
        raise ParticipantAlreadyExists(username)

    logger.info("Participant registered: id=%s username=%s", participant.id, username)
    return f"Participant {participant.username} added successfully."


def authenticate_participant(session, username, password):
    """
    Logs the participant in on the given session.

    Unknown usernames and wrong passwords raise the same error so callers
    cannot tell which one failed.
    """
    participant = Participant.objects.filter(username=username).first()
    if participant is None or participant.password != password:
        logger.warning("Login failed: username=%s", username)
        raise InvalidCredentials()

    session.activate(participant)
    logger.info("Participant logged in: id=%s", participant.id)
    return "Logged in"


def sign_out(session):
    participant = session.current_participant()
    if participant is None:
        raise NoActiveSession()

    logger.info("Participant logged out: id=%s", participant.id)
    session.clear()
    return "Logged out."


def get_authenticated_participant(session):
    return _require_participant(session).username


def get_energy_balance(session):
    participant = _require_participant(session)
    return f"Your energy balance is {participant.energy_balance}"


def get_participant_transactions(session):
    """Returns every recorded trade the logged-in participant took part in, oldest first."""
    participant = _require_participant(session)
    return list(
        EnergyTransaction.objects
        .filter(Q(buyer_id=participant.id) | Q(seller_id=participant.id))
        .order_by("timestamp")
    )


def create_transaction(session, amount, operation, counterparty_username):
    """
    Executes a trade of `amount` energy between the logged-in participant and
    the participant named `counterparty_username`.

    Checks run in this order: session, counterparty, operation, amount,
    balance. The first failing check raises and nothing is written.
    """
    participant = _require_participant(session)

    counterparty = Participant.objects.filter(username=counterparty_username).first()
    if counterparty is None:
        logger.warning("Trade rejected, unknown counterparty: username=%s", counterparty_username)
        raise CounterpartyNotFound(counterparty_username)

    if operation not in (EnergyTransaction.BUY, EnergyTransaction.SELL):
        logger.warning("Trade rejected, invalid operation: operation=%r", operation)
        raise InvalidOperation(operation)

    if not math.isfinite(amount) or amount <= 0:
        logger.warning("Trade rejected, invalid amount: amount=%r", amount)
        raise InvalidAmount(amount)

    with transaction.atomic():
        # Lock both rows in a stable order so opposite trades cannot deadlock
        locked = {
            p.id: p
            for p in (
                Participant.objects
                .select_for_update()
                .filter(id__in=[participant.id, counterparty.id])
                .order_by("id")
            )
        }
        participant = locked[participant.id]
        counterparty = locked[counterparty.id]

        if operation == EnergyTransaction.BUY:
            payer, payee = participant, counterparty
        else:
            payer, payee = counterparty, participant

        if payer.energy_balance < amount:
            logger.warning(
                "Insufficient energy: participant=%s operation=%s requested=%s available=%s",
                payer.id, operation, amount, payer.energy_balance,
            )
            raise InsufficientEnergy(payer.id, amount, payer.energy_balance, operation)

        EnergyMarket.load()
        market = EnergyMarket.objects.select_for_update().get(id=EnergyMarket.SINGLETON_ID)

        # Balances and the traded total must stay representable as finite floats
        if not (
            math.isfinite(payee.energy_balance + amount)
            and math.isfinite(market.total_energy_traded + amount)
        ):
            logger.warning(
                "Trade rejected, amount overflows: participant=%s amount=%s balance=%s traded=%s",
                payee.id, amount, payee.energy_balance, market.total_energy_traded,
            )
            raise InvalidAmount(amount, "Amount would overflow the energy balance.")

        record = EnergyTransaction.objects.create(
            amount=amount,
            operation=operation,
            timestamp=clock.now(),
            buyer=participant,
            seller=counterparty,
        )

        Participant.objects.filter(id=payer.id).update(energy_balance=F("energy_balance") - amount)
        Participant.objects.filter(id=payee.id).update(energy_balance=F("energy_balance") + amount)

        EnergyMarket.objects.filter(id=EnergyMarket.SINGLETON_ID).update(
            total_energy_traded=F("total_energy_traded") + amount
        )

    logger.info(
        "Trade recorded: id=%s operation=%s amount=%s buyer=%s seller=%s",
        record.id, operation, amount, participant.id, counterparty.id,
    )
    return "Transaction successful."


def get_market_details():
    """
    Returns the market aggregate: the running traded total plus every
    transaction and participant currently stored.

    The lists are read from the database on each call, so they always match
    what has been committed.
    """
    total = (
        EnergyMarket.objects
        .filter(id=EnergyMarket.SINGLETON_ID)
        .values_list("total_energy_traded", flat=True)
        .first()
    )
    return {
        "total_energy_traded": total or 0.0,
        "transactions": list(EnergyTransaction.objects.all()),
        "participants": list(Participant.objects.order_by("username")),
    }
