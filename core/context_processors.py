from .sources import DjangoRequestSource

def query_params(request):
    """Make the current path and parsed query parameters available in all templates"""
    source = DjangoRequestSource(request)
    return {
        'current_path': '/' + source.get_current_path(),
        'current_query': source.get_current_query_params(),
    }
