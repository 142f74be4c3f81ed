from django.urls import path

from . import views

urlpatterns = [
    path('quote/', views.quote_view, name='quote'),
    path('classify/', views.classify_view, name='classify'),
    path('request-quote/', views.request_quote_view, name='request_quote'),
    path('catalog/', views.catalog_view, name='catalog'),
]
