from django.urls import include, path

urlpatterns = [
    path('api/pricing/', include('favor_pricing.urls')),
]
