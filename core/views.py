from django.core.paginator import Paginator
from django.shortcuts import render

from .params import parse_query

# Sample data for the demo page; the query string helpers need no database
PAINTS = [
    {'name': 'Alabaster', 'finish': 'matt', 'colour': 'white'},
    {'name': 'Brick Red', 'finish': 'gloss', 'colour': 'red'},
    {'name': 'Cobalt', 'finish': 'satin', 'colour': 'blue'},
    {'name': 'Dove Grey', 'finish': 'matt', 'colour': 'grey'},
    {'name': 'Emerald', 'finish': 'gloss', 'colour': 'green'},
    {'name': 'Flint', 'finish': 'satin', 'colour': 'grey'},
    {'name': 'Harvest Gold', 'finish': 'gloss', 'colour': 'yellow'},
    {'name': 'Ivory', 'finish': 'satin', 'colour': 'white'},
    {'name': 'Midnight', 'finish': 'matt', 'colour': 'blue'},
    {'name': 'Sage', 'finish': 'matt', 'colour': 'green'},
    {'name': 'Terracotta', 'finish': 'satin', 'colour': 'red'},
    {'name': 'Wheat', 'finish': 'gloss', 'colour': 'yellow'},
]

SORT_FIELDS = ['name', 'finish', 'colour']
PER_PAGE = 5


def index(request):
    """Paint list filtered by the query string; every link is built with the query tags."""
    params = parse_query(request.META.get('QUERY_STRING', ''))

    paints = PAINTS

    # Handle search
    search_query = request.GET.get('q', '')
    if search_query.strip():
        needle = search_query.strip().lower()
        paints = [p for p in paints if needle in p['name'].lower()]

    # Handle finish filter (finish[]=matt&finish[]=gloss)
    finishes = params.get('finish', [])
    if isinstance(finishes, str):
        finishes = [finishes]
    if finishes:
        paints = [p for p in paints if p['finish'] in finishes]

    # Handle sorting
    sort_by = request.GET.get('sort', 'name')
    if sort_by not in SORT_FIELDS:
        sort_by = 'name'
    paints = sorted(paints, key=lambda p: p[sort_by])

    # Pagination
    paginator = Paginator(paints, PER_PAGE)
    page_obj = paginator.get_page(request.GET.get('page'))

    context = {
        'page_obj': page_obj,
        'search_query': search_query,
        'finishes': finishes,
        'finish_options': _finish_options(finishes),
        'sort_by': sort_by,
        'sort_fields': SORT_FIELDS,
    }
    return render(request, 'core/index.html', context)


def _finish_options(selected):
    """Each finish with the finish[] list a click on it should produce."""
    options = []
    for finish in sorted({p['finish'] for p in PAINTS}):
        if finish in selected:
            toggled = [f for f in selected if f != finish]
        else:
            toggled = selected + [finish]
        options.append({'name': finish, 'selected': finish in selected, 'toggled': toggled})
    return options
