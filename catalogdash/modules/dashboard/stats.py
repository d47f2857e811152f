"""
Dashboard Statistics
====================

Every figure on the dashboard is an independent read against the products
collection, so they are fanned out over a thread pool and gathered once all
of them have answered.
"""

from concurrent.futures import ThreadPoolExecutor

from pymongo import DESCENDING

MONTH_NAMES = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')

RECENT_LIMIT = 5
TOP_SELLING_LIMIT = 5


def _sum_pipeline(left, right):
    return [{'$group': {'_id': None, 'total': {'$sum': {'$multiply': [f'${left}', f'${right}']}}}}]


def _first_total(rows):
    return rows[0]['total'] if rows else 0


def month_label(month):
    """1-indexed month number to its short name"""
    if isinstance(month, int) and 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return str(month)


def build_queries(collection, low_stock_threshold=10):
    """
    Map each dashboard figure to a zero-argument callable reading it.

    Monthly buckets group on the month of createdAt only, so the same month
    of different years lands in one bucket.
    """
    return {
        'total_products': lambda: collection.count_documents({}),
        'active_products': lambda: collection.count_documents({'status': 'active'}),
        'low_stock_products': lambda: collection.count_documents(
            {'stock': {'$gt': 0, '$lte': low_stock_threshold}}
        ),
        'out_of_stock_products': lambda: collection.count_documents({'stock': 0}),
        'category_stats': lambda: list(collection.aggregate([
            {'$group': {'_id': '$category', 'count': {'$sum': 1}, 'totalStock': {'$sum': '$stock'}}},
            {'$sort': {'count': -1}},
        ])),
        'sales_stats': lambda: list(collection.aggregate([
            {'$group': {
                '_id': '$category',
                'totalSales': {'$sum': '$sales'},
                'totalRevenue': {'$sum': {'$multiply': ['$sales', '$price']}},
            }},
            {'$sort': {'totalSales': -1}},
        ])),
        'recent_products': lambda: list(
            collection.find().sort('createdAt', DESCENDING).limit(RECENT_LIMIT)
        ),
        'top_selling_products': lambda: list(
            collection.find({'sales': {'$gt': 0}}).sort('sales', DESCENDING).limit(TOP_SELLING_LIMIT)
        ),
        'total_stock_value': lambda: _first_total(list(collection.aggregate(_sum_pipeline('stock', 'price')))),
        'total_sales_value': lambda: _first_total(list(collection.aggregate(_sum_pipeline('sales', 'price')))),
        'monthly_sales': lambda: list(collection.aggregate([
            {'$group': {
                '_id': {'$month': '$createdAt'},
                'sales': {'$sum': '$sales'},
                'revenue': {'$sum': {'$multiply': ['$sales', '$price']}},
            }},
            {'$sort': {'_id': 1}},
        ])),
    }


def run_queries(queries, max_workers=None):
    """Run every query concurrently; the first failure propagates"""
    with ThreadPoolExecutor(max_workers=max_workers or len(queries)) as pool:
        futures = {name: pool.submit(query) for name, query in queries.items()}
        return {name: future.result() for name, future in futures.items()}


def assemble_stats(results):
    """Shape raw query results into the dashboard payload"""
    return {
        'overview': {
            'totalProducts': results['total_products'],
            'activeProducts': results['active_products'],
            'lowStockProducts': results['low_stock_products'],
            'outOfStockProducts': results['out_of_stock_products'],
            'totalStockValue': results['total_stock_value'],
            'totalSalesValue': results['total_sales_value'],
        },
        'categoryStats': results['category_stats'],
        'salesStats': results['sales_stats'],
        'monthlySales': [
            {
                'month': month_label(row['_id']),
                'sales': row.get('sales', 0),
                'revenue': row.get('revenue', 0),
            }
            for row in results['monthly_sales']
        ],
        'recentProducts': results['recent_products'],
        'topSellingProducts': results['top_selling_products'],
    }


def collect_dashboard_stats(collection, low_stock_threshold=10):
    return assemble_stats(run_queries(build_queries(collection, low_stock_threshold)))
