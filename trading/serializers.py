from rest_framework import serializers

from trading.models import EnergyTransaction, Participant


class ParticipantSerializer(serializers.ModelSerializer):

    class Meta:
        model = Participant
        fields = ["id", "username", "energy_balance"]


class EnergyTransactionSerializer(serializers.ModelSerializer):
    buyer_id = serializers.UUIDField(read_only=True)
    seller_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = EnergyTransaction
        fields = ["id", "amount", "timestamp", "buyer_id", "seller_id", "operation"]


class EnergyMarketSerializer(serializers.Serializer):
    total_energy_traded = serializers.FloatField()
    transactions = EnergyTransactionSerializer(many=True)
    participants = ParticipantSerializer(many=True)
