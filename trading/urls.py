from django.urls import path
from .views import (
    AuthenticatedParticipantView,
    EnergyBalanceView,
    LoginView,
    LogoutView,
    MarketDetailsView,
    ParticipantsView,
    TransactionsView,
)

urlpatterns = [
    path("", MarketDetailsView.as_view(), name="market-details"),
    path("balance/", EnergyBalanceView.as_view(), name="energy-balance"),
    path("transactions/", TransactionsView.as_view(), name="transactions"),
    path("participants/", ParticipantsView.as_view(), name="participants"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", AuthenticatedParticipantView.as_view(), name="authenticated-participant"),
]
