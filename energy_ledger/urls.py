from django.urls import include, path

urlpatterns = [
    path("api/market/", include("trading.urls")),
]
