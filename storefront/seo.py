"""
Structured data for search engines.
"""

from typing import Any, Dict

from storefront.config.brand import BrandConfig


def generate_structured_data(config: BrandConfig) -> Dict[str, Any]:
    """schema.org LocalBusiness description of the brand's primary location."""
    info = config.business_info

    data: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": info.type,
        "name": config.brand_name,
        "@id": info.domain,
        "url": info.domain,
        "telephone": config.contact.phone or config.contact.whatsapp_number,
    }

    if info.locations:
        location = info.locations[0]
        data["address"] = {
            "@type": "PostalAddress",
            "streetAddress": location.address,
            "addressLocality": location.locality,
            "addressRegion": location.region,
            "addressCountry": location.country,
        }
        if location.coordinates is not None:
            data["geo"] = {
                "@type": "GeoCoordinates",
                "latitude": location.coordinates.latitude,
                "longitude": location.coordinates.longitude,
            }

    data["openingHoursSpecification"] = [
        {
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": hours.day_of_week,
            "opens": hours.opens,
            "closes": hours.closes,
        }
        for hours in info.opening_hours
    ]
    data["servesCuisine"] = info.cuisine
    data["priceRange"] = info.price_range
    data["description"] = info.description
    data["hasMenu"] = f"{info.domain}/menu"

    return data
