"""
OrderDesk Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("commands", views.commands_view),
    path("view/<str:order_number>", views.invoice_document_view),
]
