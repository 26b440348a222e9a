"""
Persistence Models — Energy Market Ledger (Django ORM)

This module defines the persistence layer for a peer-to-peer energy trading
ledger: registered participants, the append-only log of trades between them,
and the market-wide traded-energy counter.

Key decisions:

- Participant and EnergyTransaction are keyed by random UUIDs generated at
  creation time.
- username is UNIQUE at the database level, which doubles as the lookup index
  used for login and counterparty resolution.
- Passwords are stored and compared as plain text.
- EnergyTransaction rows are never updated or deleted once written.
- EnergyMarket is a single row whose total is incremented by every successful
  trade and never recomputed from the transaction log.
"""

from django.db import models

from trading.domain.identifiers import generate_id


class Participant(models.Model):
    """A registered trader holding a mutable energy balance."""

    id = models.UUIDField(primary_key=True, default=generate_id, editable=False)
    username = models.CharField(max_length=150, unique=True)
    password = models.CharField(max_length=128)
    energy_balance = models.FloatField()

    def __str__(self):
        return f"Participant {self.username} - Energy: {self.energy_balance}"


class EnergyTransaction(models.Model):
    """
    Records one completed trade.

    buyer is always the participant who initiated the trade and seller always
    the named counterparty, whichever way the energy moved. operation tells
    the direction: on "buy" the buyer's balance went down, on "sell" it went up.
    """

    BUY = "buy"
    SELL = "sell"
    OPERATION_CHOICES = (
        (BUY, "Buy"),
        (SELL, "Sell"),
    )

    id = models.UUIDField(primary_key=True, default=generate_id, editable=False)
    amount = models.FloatField()
    timestamp = models.BigIntegerField()
    buyer = models.ForeignKey(
        Participant,
        on_delete=models.PROTECT,
        related_name="initiated_transactions",
    )
    seller = models.ForeignKey(
        Participant,
        on_delete=models.PROTECT,
        related_name="counterparty_transactions",
    )
    operation = models.CharField(max_length=4, choices=OPERATION_CHOICES)

    class Meta:
        ordering = ["timestamp"]

    def __str__(self):
        return f"Transaction {self.id} - {self.operation} {self.amount}"


class EnergyMarket(models.Model):
    """Singleton row holding the running total of energy traded on the market."""

    SINGLETON_ID = 1

    total_energy_traded = models.FloatField(default=0.0)

    @classmethod
    def load(cls):
        market, _ = cls.objects.get_or_create(id=cls.SINGLETON_ID)
        return market

    def __str__(self):
        return f"Market - Traded: {self.total_energy_traded}"
